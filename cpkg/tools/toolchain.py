# SPDX-License-Identifier: MIT
"""Toolchain base implementation.

A Toolchain is a coordinated set of tools that work together
(e.g., the GCC toolchain is gcc, g++ and ar with compatible flags).
Each toolchain describes, as data, how cpkg should talk to it: the
executables it uses, how include and library flags are spelled, and the
ninja rules it needs. The generator consults these capabilities instead
of branching on the toolchain name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Tool roles every toolchain provides, in the order they are written out.
TOOL_ROLES: tuple[str, ...] = ("cc", "cxx", "ld", "ar")

# Supported build variants.
VARIANTS: tuple[str, ...] = ("debug", "release")


class BaseToolchain(ABC):
    """Abstract base class for toolchains.

    Subclasses provide the tool executables and rule commands; the
    flag spelling defaults below match GCC-style drivers.

    Attributes:
        include_prefix: Prefix turning a directory into an include flag.
        supports_library_dirs: Whether project library directories can be
            passed to the linker as search paths.
    """

    include_prefix: str = "-I"
    supports_library_dirs: bool = True

    def __init__(self, name: str) -> None:
        """Initialize a toolchain.

        Args:
            name: Toolchain tag, also used as the rule name prefix.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def tools(self) -> dict[str, str]:
        """Executables keyed by role ('cc', 'cxx', 'ld', 'ar')."""
        ...

    @abstractmethod
    def rules(self) -> dict[str, dict[str, Any]]:
        """Ninja rules for this toolchain.

        Returns:
            Mapping of rule name to keyword arguments for Writer.rule().
        """
        ...

    @abstractmethod
    def variant_flags(self, variant: str) -> list[str]:
        """Compile flags for a build variant ('debug' or 'release')."""
        ...

    def tool_variable(self, role: str) -> str:
        """Name of the manifest variable holding a tool's executable."""
        return f"{self._name}_{role}"

    def rule_name(self, role: str) -> str:
        """Name of the ninja rule for a role (e.g. 'gcc_cc')."""
        return f"{self._name}_{role}"

    def tool_variables(self) -> dict[str, str]:
        """Manifest variables naming each tool executable."""
        return {self.tool_variable(role): self.tools[role] for role in TOOL_ROLES}

    def include_flags(self, include_dirs: list[str]) -> list[str]:
        return [f"{self.include_prefix}{d}" for d in include_dirs]

    def library_dir_flags(self, lib_dirs: list[str]) -> list[str]:
        """Search-path flags for a project's own library directories."""
        if not self.supports_library_dirs:
            return []
        return [f"-L{d}" for d in lib_dirs]

    def project_library_flags(self, directory: str, name: str) -> list[str]:
        """Link flags for a library built by another project.

        Args:
            directory: Directory holding the library output.
            name: Project name of the library.
        """
        return [f"-L{directory}", f"-l{name}"]

    def library_file_flags(self, paths: list[str]) -> list[str]:
        """Linker inputs for the library files of an external dependency."""
        return list(paths)

    def __repr__(self) -> str:
        tools = ", ".join(self.tools.values())
        return f"{self.__class__.__name__}({self.name!r}, tools=[{tools}])"
