# SPDX-License-Identifier: MIT
"""Toolchain definitions (GCC, Clang, MSVC) and lookup by tag."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from cpkg.core.errors import UnknownToolchainError
from cpkg.toolchains.gcc import GccToolchain
from cpkg.toolchains.llvm import LlvmToolchain
from cpkg.toolchains.msvc import MsvcToolchain

if TYPE_CHECKING:
    from cpkg.configure.platform import Platform
    from cpkg.tools.toolchain import BaseToolchain

# Known toolchains, in the order their blocks are written to a manifest.
toolchain_registry: dict[str, type[BaseToolchain]] = {
    "gcc": GccToolchain,
    "clang": LlvmToolchain,
    "msvc": MsvcToolchain,
}


def find_toolchain(name: str) -> BaseToolchain:
    """Get a toolchain by tag.

    Args:
        name: Toolchain tag ('gcc', 'clang' or 'msvc'); case-insensitive.

    Raises:
        UnknownToolchainError: If the tag is not recognized.
    """
    if not isinstance(name, str):
        raise UnknownToolchainError(str(name))
    cls = toolchain_registry.get(name.lower())
    if cls is None:
        raise UnknownToolchainError(name)
    return cls()


def default_toolchain(platform: Platform | None = None) -> str:
    """Pick the toolchain tag used when a project does not name one.

    Precedence (highest to lowest):
        1. CPKG_TOOLCHAIN environment variable
        2. 'msvc' on Windows, 'gcc' everywhere else
    """
    from_env = os.environ.get("CPKG_TOOLCHAIN")
    if from_env:
        return from_env

    if platform is None:
        from cpkg.configure.platform import get_platform

        platform = get_platform()
    return "msvc" if platform.is_windows else "gcc"


__all__ = [
    "GccToolchain",
    "LlvmToolchain",
    "MsvcToolchain",
    "default_toolchain",
    "find_toolchain",
    "toolchain_registry",
]
