# SPDX-License-Identifier: MIT
"""File helpers: source discovery and idempotent manifest writes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from cpkg.core.errors import ManifestWriteError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS: tuple[str, ...] = (".cpp", ".cxx", ".cc", ".c")
HEADER_EXTENSIONS: tuple[str, ...] = (".hpp", ".hxx", ".hh", ".h")
MODULE_EXTENSIONS: tuple[str, ...] = (".ixx", ".mxx", ".cppm", ".cxxm")


def find_files_with_extensions(
    directory: Path | str, extensions: Iterable[str]
) -> list[Path]:
    """Recursively find regular files with one of the given extensions.

    Returns an empty list if the directory does not exist. Results are
    sorted so generated manifests do not depend on directory order.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    wanted = set(extensions)
    return sorted(
        p for p in directory.rglob("*") if p.is_file() and p.suffix in wanted
    )


def find_source_files(directory: Path | str) -> list[Path]:
    return find_files_with_extensions(directory, SOURCE_EXTENSIONS)


def find_header_files(directory: Path | str) -> list[Path]:
    return find_files_with_extensions(directory, HEADER_EXTENSIONS)


def find_module_files(directory: Path | str) -> list[Path]:
    return find_files_with_extensions(directory, MODULE_EXTENSIONS)


def write_if_changed(path: Path | str, text: str) -> bool:
    """Write text to path unless the file already holds exactly that text.

    The new content goes to a temporary file that then replaces the
    target, so readers never see a partially written file.

    Args:
        path: Destination file.
        text: Complete new content.

    Returns:
        True if the file was written, False if it was already up to date.

    Raises:
        ManifestWriteError: If the file cannot be written.
    """
    path = Path(path)
    if path.is_file():
        try:
            with open(path, encoding="utf-8", newline="") as f:
                if f.read() == text:
                    logger.debug("%s is unchanged", path)
                    return False
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot compare with existing %s: %s", path, e)

    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise ManifestWriteError(str(path), e.strerror or str(e)) from e

    logger.debug("Wrote %s", path)
    return True
