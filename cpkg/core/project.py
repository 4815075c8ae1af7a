# SPDX-License-Identifier: MIT
"""Projects and dependencies registered with the generator.

A Project is a unit cpkg compiles from source (a program, a static
library, or a bag of object files). A Dependency is a pre-built external
library that projects link against. Both carry flags that propagate to
the projects that depend on them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from cpkg.configure.platform import get_platform
from cpkg.util.source_location import get_caller_location

if TYPE_CHECKING:
    from cpkg.configure.platform import Platform
    from cpkg.util.source_location import SourceLocation


class BuildType(Enum):
    """What a project produces once its sources are compiled."""

    EXECUTABLE = "executable"
    STATIC_LIBRARY = "static"
    SHARED_LIBRARY = "shared"
    COMPILE_ONLY = "object"  # compile but do not call the linker

    @property
    def is_library(self) -> bool:
        return self in (BuildType.STATIC_LIBRARY, BuildType.SHARED_LIBRARY)

    def __str__(self) -> str:
        return self.value


def output_file_name(
    name: str, build_type: BuildType, platform: Platform | None = None
) -> str:
    """Map a project name to the file name of its final output.

    Args:
        name: Project name.
        build_type: What the project produces.
        platform: Platform to name the file for (default: host platform).

    Returns:
        The platform-specific output file name.

    Examples:
        >>> from cpkg.configure.platform import Platform
        >>> output_file_name("app", BuildType.EXECUTABLE, Platform("linux"))
        'app'
        >>> output_file_name("z", BuildType.STATIC_LIBRARY, Platform("windows"))
        'libz.lib'
    """
    if platform is None:
        platform = get_platform()

    if build_type is BuildType.EXECUTABLE:
        return name + platform.exe_suffix
    if build_type is BuildType.STATIC_LIBRARY:
        return platform.static_lib_prefix + name + platform.static_lib_suffix
    if build_type is BuildType.SHARED_LIBRARY:
        return platform.shared_lib_prefix + name + platform.shared_lib_suffix
    return name + platform.object_suffix


@dataclass
class ExportedFlags:
    """Flags a project hands to the projects that depend on it."""

    cflags: str = ""
    cxxflags: str = ""
    ldflags: str = ""


@dataclass
class Project:
    """A named build unit compiled from source.

    Attributes:
        name: Unique name; must not contain whitespace.
        version: Informational version string.
        sources: Source files, compiled in order.
        include_dirs: Include directories for this project's sources.
            Consumers of the project also receive them.
        lib_dirs: Library search directories for linking.
        dependencies: Names of projects or dependencies this one uses.
        cflags: C compiler flags.
        cxxflags: C++ compiler flags.
        ldflags: Linker flags.
        output_path: Path of the final output. Defaults to the platform
            file name derived from name and build_type.
        build_type: What the project produces.
        toolchain: Toolchain tag ('gcc', 'clang' or 'msvc').
        exports: Flags propagated to consumers.
        built: Set by callers tracking whether the output is up to date.
        defined_at: Where the project was created in user code.
    """

    name: str
    version: str = ""
    sources: list[str] = field(default_factory=list)
    include_dirs: list[str] = field(default_factory=list)
    lib_dirs: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    cflags: str = ""
    cxxflags: str = ""
    ldflags: str = ""
    output_path: str | None = None
    build_type: BuildType = BuildType.EXECUTABLE
    toolchain: str = "gcc"
    exports: ExportedFlags = field(default_factory=ExportedFlags)
    built: bool = False
    defined_at: SourceLocation | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.defined_at is None:
            self.defined_at = get_caller_location()

    def output(self, platform: Platform | None = None) -> str:
        """Get the path of the file this project produces."""
        if self.output_path:
            return os.fspath(self.output_path)
        return output_file_name(self.name, self.build_type, platform)

    def describe(self) -> str:
        """Render a human-readable summary of the project."""
        lines = [
            f"Project: {self.name} version {self.version}",
            f"Build Type: {self.build_type}",
            f"Compiler: {self.toolchain}",
            f"Source Files: {', '.join(self.sources)}",
            f"Include Directories: {', '.join(self.include_dirs)}",
            f"Library Directories: {', '.join(self.lib_dirs)}",
            f"C Flags: {self.cflags}",
            f"C++ Flags: {self.cxxflags}",
            f"Linker Flags: {self.ldflags}",
            f"Output Path: {self.output()}",
            f"(Export) C Flags: {self.exports.cflags}",
            f"(Export) C++ Flags: {self.exports.cxxflags}",
            f"(Export) Linker Flags: {self.exports.ldflags}",
            "Dependencies:",
        ]
        lines.extend(f"  {dep}" for dep in self.dependencies)
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"Project({self.name!r}, {self.build_type}, {self.toolchain})"


@dataclass
class Dependency:
    """A pre-built external library.

    Dependencies are never compiled by cpkg. Projects that list one
    receive its flags and include directories, and link its library files.

    Attributes:
        name: Unique name, sharing the namespace of projects.
        version: Informational version string.
        library_paths: Library files to link; must exist when registered.
        include_dirs: Include directories for consumers.
        cflags: C compiler flags for consumers.
        cxxflags: C++ compiler flags for consumers.
        ldflags: Linker flags for consumers.
        defined_at: Where the dependency was created in user code.
    """

    name: str
    version: str = ""
    library_paths: list[str] = field(default_factory=list)
    include_dirs: list[str] = field(default_factory=list)
    cflags: str = ""
    cxxflags: str = ""
    ldflags: str = ""
    defined_at: SourceLocation | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.defined_at is None:
            self.defined_at = get_caller_location()

    def __str__(self) -> str:
        return f"Dependency({self.name!r}, version={self.version!r})"
