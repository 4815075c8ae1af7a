# SPDX-License-Identifier: MIT
"""Host platform description.

The platform decides file naming: object file suffix, executable
suffix, and library prefixes/suffixes used for generated outputs.
"""

from __future__ import annotations

import platform as _platform
import sys
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Platform:
    """Information about a target platform.

    Attributes:
        os: Operating system name ('linux', 'darwin', 'windows', ...).
        arch: Machine architecture ('x86_64', 'arm64', ...).
    """

    os: str
    arch: str = ""

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_macos(self) -> bool:
        return self.os == "darwin"

    @property
    def is_linux(self) -> bool:
        return self.os == "linux"

    @property
    def object_suffix(self) -> str:
        return ".obj" if self.is_windows else ".o"

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self.is_windows else ""

    @property
    def static_lib_prefix(self) -> str:
        return "lib"

    @property
    def static_lib_suffix(self) -> str:
        return ".lib" if self.is_windows else ".a"

    @property
    def shared_lib_prefix(self) -> str:
        return "lib"

    @property
    def shared_lib_suffix(self) -> str:
        return ".dll" if self.is_windows else ".so"


def _detect_os() -> str:
    if sys.platform.startswith("win") or sys.platform == "cygwin":
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


@lru_cache(maxsize=1)
def get_platform() -> Platform:
    """Get the platform cpkg is running on."""
    return Platform(os=_detect_os(), arch=_platform.machine().lower())
