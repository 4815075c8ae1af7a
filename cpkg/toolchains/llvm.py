# SPDX-License-Identifier: MIT
"""LLVM/Clang toolchain implementation.

Clang is a drop-in replacement for GCC on the command line, so this
toolchain only swaps the executables; flag spelling and rule shapes are
shared with the GCC toolchain.
"""

from __future__ import annotations

from cpkg.toolchains.gcc import GccToolchain


class LlvmToolchain(GccToolchain):
    """Clang toolchain (clang, clang++, ar)."""

    TOOLS: dict[str, str] = {
        "cc": "clang",
        "cxx": "clang++",
        "ld": "clang++",
        "ar": "ar",
    }

    def __init__(self, name: str = "clang") -> None:
        super().__init__(name)
