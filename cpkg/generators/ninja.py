# SPDX-License-Identifier: MIT
"""Ninja manifest generator.

NinjaGenerator owns the registry of projects and dependencies and turns
it into one build.ninja:

1. Find the toolchains the registered projects use.
2. Write one block of tool variables per toolchain, the global flag
   placeholders, and the compile/link/archive rules of each toolchain.
3. For each project, in registration order, resolve its flags from its
   dependencies and write one compile edge per source file plus the
   link or archive edge for its output.
4. Compare the rendered text with the manifest on disk and only write
   it when it changed, so unchanged manifests never trigger rebuilds.

Any error aborts the whole pass; the previous manifest is left intact.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Union

from cpkg.configure.platform import get_platform
from cpkg.core.errors import (
    DependencyNotFoundError,
    DuplicateNameError,
    InvalidNameError,
    MissingLibraryPathError,
    NoToolchainSelectedError,
    UnsupportedBuildTypeError,
)
from cpkg.core.project import BuildType, Dependency, Project
from cpkg.generators.generator import BaseGenerator
from cpkg.generators.ninja_syntax import Writer
from cpkg.toolchains import find_toolchain, toolchain_registry
from cpkg.tools.toolchain import VARIANTS
from cpkg.util.files import write_if_changed

if TYPE_CHECKING:
    from cpkg.configure.platform import Platform
    from cpkg.tools.toolchain import BaseToolchain

logger = logging.getLogger(__name__)

Entity = Union[Project, Dependency]

MANIFEST_NAME = "build.ninja"


@dataclass
class ResolvedFlags:
    """Flags for one project after merging in its dependencies.

    Attributes:
        cflags: C compiler flags.
        cxxflags: C++ compiler flags.
        ldflags: Linker flags.
        link_inputs: Library files the link step must wait for.
    """

    cflags: list[str] = field(default_factory=list)
    cxxflags: list[str] = field(default_factory=list)
    ldflags: list[str] = field(default_factory=list)
    link_inputs: list[str] = field(default_factory=list)


class NinjaGenerator(BaseGenerator):
    """Generator that produces a build.ninja from registered projects.

    Registration is append-only. generate() may be called any number of
    times; each call renders the complete manifest from scratch.

    Example:
        gen = NinjaGenerator()
        gen.register(Dependency("z", library_paths=["/usr/lib/libz.a"]))
        gen.register(Project("app", sources=["main.c"], dependencies=["z"]))
        gen.generate()

    Attributes:
        root_dir: Directory relative paths are checked against, and the
            default location of the manifest.
        manifest_path: Where generate() writes by default.
        platform: Platform used for object and output file names.
        variant: Optional build variant ('debug' or 'release').
    """

    def __init__(
        self,
        *,
        root_dir: Path | str | None = None,
        manifest: str = MANIFEST_NAME,
        width: int = 78,
        platform: Platform | None = None,
        variant: str | None = None,
    ) -> None:
        """Create a ninja generator.

        Args:
            root_dir: Project root (default: current directory).
            manifest: Manifest file name, relative to root_dir.
            width: Preferred maximum manifest line length.
            platform: Target platform (default: host platform).
            variant: Build variant adding toolchain-specific compile flags.

        Raises:
            ValueError: If the variant is not known.
        """
        if variant is not None and variant not in VARIANTS:
            raise ValueError(
                f"unknown variant {variant!r} (expected one of {', '.join(VARIANTS)})"
            )
        self.root_dir = Path(root_dir) if root_dir is not None else None
        super().__init__(
            "ninja",
            self.root_dir / manifest if self.root_dir is not None else manifest,
        )
        self.platform = platform or get_platform()
        self.variant = variant
        self._writer = Writer(width)
        self._projects: list[Project] = []
        self._dependencies: list[Dependency] = []
        self._entities: dict[str, Entity] = {}

    # Registration

    def register(self, entity: Entity) -> None:
        """Register a project or dependency.

        Raises:
            InvalidNameError: If the name is empty or contains whitespace.
            DuplicateNameError: If the name is already registered.
            MissingLibraryPathError: If a dependency's library file
                does not exist.
            TypeError: If entity is neither a Project nor a Dependency.
        """
        if isinstance(entity, Project):
            self.add_project(entity)
        elif isinstance(entity, Dependency):
            self.add_dependency(entity)
        else:
            raise TypeError(
                f"cannot register {type(entity).__name__}, "
                "expected Project or Dependency"
            )

    def add_project(self, project: Project) -> None:
        self._check_name(project)
        self._projects.append(project)
        self._entities[project.name] = project
        logger.debug("Registered project %s", project)

    def add_dependency(self, dependency: Dependency) -> None:
        self._check_name(dependency)
        for library in dependency.library_paths:
            if not self._on_disk(library).exists():
                raise MissingLibraryPathError(
                    dependency.name, os.fspath(library), dependency.defined_at
                )
        self._dependencies.append(dependency)
        self._entities[dependency.name] = dependency
        logger.debug("Registered dependency %s", dependency)

    def _check_name(self, entity: Entity) -> None:
        name = entity.name
        if not name or any(c.isspace() for c in name):
            raise InvalidNameError(name, entity.defined_at)
        if name in self._entities:
            raise DuplicateNameError(name, entity.defined_at)

    def _on_disk(self, path: str) -> Path:
        p = Path(path)
        if self.root_dir is not None and not p.is_absolute():
            return self.root_dir / p
        return p

    @property
    def projects(self) -> list[Project]:
        """Get all registered projects, in registration order."""
        return list(self._projects)

    @property
    def dependencies(self) -> list[Dependency]:
        """Get all registered dependencies, in registration order."""
        return list(self._dependencies)

    def get(self, name: str) -> Entity | None:
        """Look up a registered project or dependency by name."""
        return self._entities.get(name)

    # Resolution

    def toolchains_in_use(self) -> list[BaseToolchain]:
        """Get the toolchains selected by registered projects.

        Returns:
            One toolchain per distinct tag, in manifest order.

        Raises:
            UnknownToolchainError: If a project names an unknown toolchain.
            NoToolchainSelectedError: If no project is registered.
        """
        found: dict[str, BaseToolchain] = {}
        for project in self._projects:
            toolchain = find_toolchain(project.toolchain)
            found.setdefault(toolchain.name, toolchain)
        if not found:
            raise NoToolchainSelectedError()
        return [found[name] for name in toolchain_registry if name in found]

    def resolve_flags(
        self, project: Project, toolchain: BaseToolchain | None = None
    ) -> ResolvedFlags:
        """Compute a project's effective flags.

        Starts from the project's own flags, then for each dependency in
        order appends what it contributes: exported flags, include
        directories, and link flags or library files. The project's own
        include and library directories come last.

        Raises:
            DependencyNotFoundError: If a dependency name is not registered.
        """
        if toolchain is None:
            toolchain = find_toolchain(project.toolchain)

        variant_flags = toolchain.variant_flags(self.variant) if self.variant else []
        flags = ResolvedFlags(
            cflags=[*variant_flags, project.cflags],
            cxxflags=[*variant_flags, project.cxxflags],
            ldflags=[project.ldflags],
        )

        for name in project.dependencies:
            entity = self._entities.get(name)
            if isinstance(entity, Project):
                flags.cflags.append(entity.exports.cflags)
                flags.cxxflags.append(entity.exports.cxxflags)
                flags.ldflags.append(entity.exports.ldflags)
                if entity.build_type.is_library:
                    library = entity.output(self.platform)
                    directory = os.path.dirname(library) or "."
                    flags.ldflags.extend(
                        toolchain.project_library_flags(directory, entity.name)
                    )
                    flags.link_inputs.append(library)
            elif isinstance(entity, Dependency):
                flags.cflags.append(entity.cflags)
                flags.cxxflags.append(entity.cxxflags)
                flags.ldflags.append(entity.ldflags)
                libraries = [os.fspath(p) for p in entity.library_paths]
                flags.ldflags.extend(toolchain.library_file_flags(libraries))
                flags.link_inputs.extend(libraries)
            else:
                raise DependencyNotFoundError(project.name, name, project.defined_at)

            includes = toolchain.include_flags(entity.include_dirs)
            flags.cflags.extend(includes)
            flags.cxxflags.extend(includes)

        includes = toolchain.include_flags(project.include_dirs)
        flags.cflags.extend(includes)
        flags.cxxflags.extend(includes)
        flags.ldflags.extend(toolchain.library_dir_flags(project.lib_dirs))
        return flags

    def object_file(self, source: str) -> str:
        """Get the object file a source file compiles to."""
        return os.path.splitext(source)[0] + self.platform.object_suffix

    # Rendering

    def render(self) -> str:
        """Render the complete manifest text without writing it.

        The writer's buffer is cleared first, so rendering the same
        registry twice gives identical text. On error the buffer is
        cleared again and the exception propagates.
        """
        self._writer.reset()
        try:
            toolchains = self.toolchains_in_use()
            by_name = {toolchain.name: toolchain for toolchain in toolchains}

            self._write_header()
            self._write_globals(toolchains)
            self._write_rules(toolchains)
            for project in self._projects:
                toolchain = by_name[find_toolchain(project.toolchain).name]
                self._write_project(project, toolchain)
        except Exception:
            self._writer.reset()
            raise
        return self._writer.getvalue()

    def generate(self, path: Path | str | None = None) -> bool:
        """Render the manifest and write it if it changed.

        Args:
            path: Manifest path (default: manifest_path).

        Returns:
            True if the file was written, False if it was up to date.
        """
        target = Path(path) if path is not None else self.manifest_path
        text = self.render()
        try:
            written = write_if_changed(target, text)
        except Exception:
            self._writer.reset()
            raise

        if written:
            logger.info("Wrote %s", target)
        else:
            logger.info("%s is up to date", target)
        return written

    def getvalue(self) -> str:
        """Get the text rendered by the last pass."""
        return self._writer.getvalue()

    def reset(self) -> None:
        """Discard rendered text. Registered projects are kept."""
        self._writer.reset()

    def _write_header(self) -> None:
        self._writer.comment("This file is generated by cpkg. Do not edit.")
        self._writer.newline()

    def _write_globals(self, toolchains: list[BaseToolchain]) -> None:
        w = self._writer
        for toolchain in toolchains:
            w.comment(f"Toolchain: {toolchain.name}")
            for key, value in toolchain.tool_variables().items():
                w.variable(key, value)
            w.newline()

        w.comment("Global flags")
        w.variable("cflags", "")
        w.variable("cxxflags", "")
        w.variable("ldflags", "")
        w.newline()

    def _write_rules(self, toolchains: list[BaseToolchain]) -> None:
        w = self._writer
        w.comment("Rules")
        w.rule("clean", "ninja -t clean", description="Cleaning all built files")
        w.newline()
        for toolchain in toolchains:
            for name, kwargs in toolchain.rules().items():
                w.rule(name, **kwargs)
                w.newline()

    def _write_project(self, project: Project, toolchain: BaseToolchain) -> None:
        w = self._writer
        logger.debug("Generating %s", project)
        if project.version:
            w.comment(f"{project.name} {project.version}")
        else:
            w.comment(project.name)

        flags = self.resolve_flags(project, toolchain)

        objects: list[str] = []
        for source in project.sources:
            source = os.fspath(source)
            if os.path.splitext(source)[1] == ".c":
                role, key, value = "cc", "cflags", flags.cflags
            else:
                role, key, value = "cxx", "cxxflags", flags.cxxflags
            objects += w.build(
                self.object_file(source),
                toolchain.rule_name(role),
                source,
                variables={key: value},
            )

        build_type = project.build_type
        if build_type is BuildType.EXECUTABLE:
            w.build(
                project.output(self.platform),
                toolchain.rule_name("ld"),
                objects,
                implicit=flags.link_inputs,
                variables={"ldflags": flags.ldflags},
            )
        elif build_type is BuildType.STATIC_LIBRARY:
            w.build(
                project.output(self.platform),
                toolchain.rule_name("ar"),
                objects,
                implicit=flags.link_inputs,
                variables={"ldflags": flags.ldflags},
            )
        elif build_type is BuildType.SHARED_LIBRARY:
            raise UnsupportedBuildTypeError(
                project.name, build_type, project.defined_at
            )
        w.newline()
