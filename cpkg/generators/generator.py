# SPDX-License-Identifier: MIT
"""Generator base class.

A generator turns the projects and dependencies registered with it into
a file for a build executor, and knows where that file goes by default.
"""

from __future__ import annotations

from pathlib import Path


class BaseGenerator:
    """Common state for generators: a name and a default output file."""

    def __init__(self, name: str, output: Path | str) -> None:
        self._name = name
        self.manifest_path = Path(output)

    @property
    def name(self) -> str:
        return self._name

    def generate(self, path: Path | str | None = None) -> bool:
        """Write the generated file.

        Args:
            path: Where to write (default: manifest_path).

        Returns:
            True if the file was written, False if it was already current.
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not implement generate()"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {str(self.manifest_path)!r})"
