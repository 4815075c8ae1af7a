# SPDX-License-Identifier: MIT
"""Source location tracking for error messages.

Projects and dependencies remember where they were created so that
registration and generation errors can point back at the caller.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceLocation:
    """A location in user code.

    Attributes:
        filename: Path of the source file.
        lineno: Line number (1-based).
        function: Name of the enclosing function, if known.
    """

    filename: str
    lineno: int
    function: str | None = None

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


_PACKAGE_DIR = Path(__file__).resolve().parent.parent


def _is_package_file(filename: str) -> bool:
    """Whether a code filename belongs to the cpkg package or is synthesized."""
    if filename.startswith("<"):
        return True
    return Path(filename).resolve().is_relative_to(_PACKAGE_DIR)


def get_caller_location(depth: int = 2) -> SourceLocation | None:
    """Get the location of the code that called the current function.

    Frames inside the cpkg package itself, and synthesized frames such as
    dataclass-generated __init__ methods, are skipped so the result points
    at user code.

    Args:
        depth: Number of frames to walk up before looking for user code.

    Returns:
        The caller's location, or None if no frame outside cpkg exists
        (e.g., when projects come from a cpkg.toml loaded by the CLI).
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                return None
            frame = frame.f_back

        candidate = frame
        while candidate is not None:
            filename = candidate.f_code.co_filename
            if not _is_package_file(filename):
                return SourceLocation(
                    filename=filename,
                    lineno=candidate.f_lineno,
                    function=candidate.f_code.co_name,
                )
            candidate = candidate.f_back
        return None
    finally:
        del frame
