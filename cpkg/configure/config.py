# SPDX-License-Identifier: MIT
"""Project file (cpkg.toml) loading.

A project file declares the projects to build and the pre-built
dependencies they use:

    [[dependency]]
    name = "z"
    libraries = ["/usr/lib/libz.a"]

    [[project]]
    name = "app"
    type = "executable"
    source_dirs = ["src"]
    include_dirs = ["include"]
    dependencies = ["z"]
    cflags = "-Wall"

    [project.export]
    cflags = "-DUSES_APP"

Paths are kept as written, relative to the directory holding the file,
which is also where build.ninja is generated and ninja runs.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cpkg.core.errors import ConfigureError
from cpkg.core.project import BuildType, Dependency, ExportedFlags, Project
from cpkg.toolchains import default_toolchain
from cpkg.util.files import find_source_files

if TYPE_CHECKING:
    from cpkg.generators.ninja import NinjaGenerator

logger = logging.getLogger(__name__)

CONFIG_FILE = "cpkg.toml"

# Allowed keys and their expected types, per table kind.
_PROJECT_KEYS: dict[str, type] = {
    "name": str,
    "version": str,
    "type": str,
    "toolchain": str,
    "sources": list,
    "source_dirs": list,
    "include_dirs": list,
    "lib_dirs": list,
    "dependencies": list,
    "cflags": str,
    "cxxflags": str,
    "ldflags": str,
    "output": str,
    "export": dict,
}
_EXPORT_KEYS: dict[str, type] = {
    "cflags": str,
    "cxxflags": str,
    "ldflags": str,
}
_DEPENDENCY_KEYS: dict[str, type] = {
    "name": str,
    "version": str,
    "libraries": list,
    "include_dirs": list,
    "cflags": str,
    "cxxflags": str,
    "ldflags": str,
}
_TOP_LEVEL_KEYS = ("project", "dependency")


@dataclass
class ProjectFile:
    """The contents of a loaded project file.

    Attributes:
        path: Path of the file.
        projects: Projects, in file order.
        dependencies: Dependencies, in file order.
    """

    path: Path
    projects: list[Project] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)

    @property
    def root_dir(self) -> Path:
        return self.path.parent

    def register_all(self, generator: NinjaGenerator) -> None:
        """Register every dependency, then every project, with a generator."""
        for dependency in self.dependencies:
            generator.register(dependency)
        for project in self.projects:
            generator.register(project)


def find_config(search_dir: Path | None = None) -> Path | None:
    """Find the project file in a directory.

    Args:
        search_dir: Directory to search in (default: current dir).

    Returns:
        Path to cpkg.toml if found, None otherwise.
    """
    if search_dir is None:
        search_dir = Path.cwd()

    config_path = search_dir / CONFIG_FILE
    if config_path.exists() and config_path.is_file():
        return config_path

    return None


def load_project_file(
    path: Path | str, *, toolchain: str | None = None
) -> ProjectFile:
    """Load a project file.

    Args:
        path: Path to cpkg.toml.
        toolchain: Toolchain for projects that do not name one
            (default: see default_toolchain()).

    Returns:
        The parsed projects and dependencies.

    Raises:
        ConfigureError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigureError(f"cannot read {path}: {e.strerror or e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigureError(f"{path}: {e}") from e

    for key in data:
        if key not in _TOP_LEVEL_KEYS:
            raise ConfigureError(f"{path}: unknown top-level key '{key}'")

    fallback_toolchain = toolchain or default_toolchain()
    result = ProjectFile(path=path)

    for i, table in enumerate(_table_list(data, "dependency", path)):
        where = f"{path}: dependency #{i + 1}"
        _check_keys(table, _DEPENDENCY_KEYS, where)
        result.dependencies.append(
            Dependency(
                name=_required_name(table, where),
                version=table.get("version", ""),
                library_paths=_string_list(table, "libraries", where),
                include_dirs=_string_list(table, "include_dirs", where),
                cflags=table.get("cflags", ""),
                cxxflags=table.get("cxxflags", ""),
                ldflags=table.get("ldflags", ""),
            )
        )

    for i, table in enumerate(_table_list(data, "project", path)):
        where = f"{path}: project #{i + 1}"
        _check_keys(table, _PROJECT_KEYS, where)
        result.projects.append(
            _load_project(table, where, result.root_dir, fallback_toolchain)
        )

    logger.debug(
        "Loaded %d project(s) and %d dependency(ies) from %s",
        len(result.projects),
        len(result.dependencies),
        path,
    )
    return result


def _load_project(
    table: dict[str, Any], where: str, root_dir: Path, toolchain: str
) -> Project:
    name = _required_name(table, where)

    build_type_name = table.get("type", BuildType.EXECUTABLE.value)
    try:
        build_type = BuildType(build_type_name)
    except ValueError:
        choices = ", ".join(t.value for t in BuildType)
        raise ConfigureError(
            f"{where}: unknown type '{build_type_name}' (expected one of {choices})"
        ) from None

    sources = _string_list(table, "sources", where)
    for source_dir in _string_list(table, "source_dirs", where):
        found = find_source_files(root_dir / source_dir)
        if not found:
            logger.warning("%s: no source files found in %s", where, source_dir)
        for p in found:
            relative = p.relative_to(root_dir).as_posix()
            if relative not in sources:
                sources.append(relative)

    export = table.get("export", {})
    _check_keys(export, _EXPORT_KEYS, f"{where} export")

    return Project(
        name=name,
        version=table.get("version", ""),
        sources=sources,
        include_dirs=_string_list(table, "include_dirs", where),
        lib_dirs=_string_list(table, "lib_dirs", where),
        dependencies=_string_list(table, "dependencies", where),
        cflags=table.get("cflags", ""),
        cxxflags=table.get("cxxflags", ""),
        ldflags=table.get("ldflags", ""),
        output_path=table.get("output"),
        build_type=build_type,
        toolchain=table.get("toolchain", toolchain),
        exports=ExportedFlags(
            cflags=export.get("cflags", ""),
            cxxflags=export.get("cxxflags", ""),
            ldflags=export.get("ldflags", ""),
        ),
    )


def _table_list(data: dict[str, Any], key: str, path: Path) -> list[dict[str, Any]]:
    tables = data.get(key, [])
    if not isinstance(tables, list) or not all(isinstance(t, dict) for t in tables):
        raise ConfigureError(f"{path}: '{key}' must be an array of tables ([[{key}]])")
    return tables


def _check_keys(table: dict[str, Any], allowed: dict[str, type], where: str) -> None:
    for key, value in table.items():
        expected = allowed.get(key)
        if expected is None:
            raise ConfigureError(f"{where}: unknown key '{key}'")
        if not isinstance(value, expected):
            raise ConfigureError(
                f"{where}: '{key}' must be a {_TYPE_NAMES[expected]}, "
                f"not {type(value).__name__}"
            )


def _required_name(table: dict[str, Any], where: str) -> str:
    name = table.get("name")
    if not name:
        raise ConfigureError(f"{where}: missing 'name'")
    return name


def _string_list(table: dict[str, Any], key: str, where: str) -> list[str]:
    values = table.get(key, [])
    if not all(isinstance(v, str) for v in values):
        raise ConfigureError(f"{where}: '{key}' must be a list of strings")
    return list(values)


_TYPE_NAMES: dict[type, str] = {
    str: "string",
    list: "list",
    dict: "table",
}
