# SPDX-License-Identifier: MIT
"""Custom exceptions for cpkg.

All cpkg exceptions inherit from CpkgError, which includes
optional source location information for better error messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cpkg.util.source_location import SourceLocation


class CpkgError(Exception):
    """Base class for all cpkg exceptions.

    Attributes:
        message: The error message.
        location: Optional source location where the error occurred.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ConfigureError(CpkgError):
    """Error while reading a project file.

    Raised when cpkg.toml is missing, malformed, or describes
    projects with invalid values.
    """


class RegistrationError(CpkgError):
    """A project or dependency could not be registered.

    The registry is left exactly as it was before the failed call.
    """


class InvalidNameError(RegistrationError):
    """Registered name is empty or contains whitespace.

    Attributes:
        name: The rejected name.
    """

    def __init__(
        self,
        name: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.name = name
        super().__init__(
            f"invalid name {name!r}: names must be non-empty and contain no whitespace",
            location,
        )


class DuplicateNameError(RegistrationError):
    """Name is already used by a registered project or dependency.

    Attributes:
        name: The duplicated name.
    """

    def __init__(
        self,
        name: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.name = name
        super().__init__(f"name already registered: {name}", location)


class MissingLibraryPathError(RegistrationError):
    """A dependency names a library file that does not exist.

    Attributes:
        name: The dependency name.
        path: The missing library path.
    """

    def __init__(
        self,
        name: str,
        path: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.name = name
        self.path = path
        super().__init__(f"library for dependency {name} not found: {path}", location)


class GenerateError(CpkgError):
    """Error during the generate phase.

    Raised when build file generation fails. No manifest is written.
    """


class DependencyNotFoundError(GenerateError):
    """A project depends on a name that nothing registered.

    Attributes:
        project: The project declaring the dependency.
        dependency: The unresolved dependency name.
    """

    def __init__(
        self,
        project: str,
        dependency: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.project = project
        self.dependency = dependency
        super().__init__(
            f"project {project} depends on unknown project or dependency: {dependency}",
            location,
        )


class NoToolchainSelectedError(GenerateError):
    """No registered project selects a toolchain."""

    def __init__(self, location: SourceLocation | None = None) -> None:
        super().__init__(
            "no toolchain selected: register at least one project", location
        )


class UnknownToolchainError(GenerateError):
    """A project references a toolchain cpkg does not know.

    Attributes:
        toolchain: The unrecognized toolchain tag.
    """

    def __init__(
        self,
        toolchain: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.toolchain = toolchain
        super().__init__(f"unknown toolchain: {toolchain}", location)


class UnsupportedBuildTypeError(GenerateError):
    """A project requests a build type that cannot be generated yet.

    Attributes:
        project: The project name.
        build_type: The requested build type.
    """

    def __init__(
        self,
        project: str,
        build_type: object,
        location: SourceLocation | None = None,
    ) -> None:
        self.project = project
        self.build_type = build_type
        super().__init__(
            f"project {project}: build type {build_type} is not supported", location
        )


class ManifestWriteError(GenerateError):
    """The manifest file could not be read or written.

    Attributes:
        path: The manifest path.
        reason: Description of the underlying I/O error.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        location: SourceLocation | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to write {path}: {reason}", location)


class InvalidManifestTextError(CpkgError):
    """Text cannot be represented in a ninja manifest (embedded newline)."""
