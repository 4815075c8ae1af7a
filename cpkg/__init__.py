# SPDX-License-Identifier: MIT
"""
cpkg: a project manager for C/C++ that generates Ninja files.

Projects and pre-built dependencies are registered with a NinjaGenerator,
which writes a build.ninja for the ninja executor to run.
"""

from __future__ import annotations

from cpkg.core.errors import CpkgError
from cpkg.core.project import BuildType, Dependency, ExportedFlags, Project
from cpkg.generators.ninja import NinjaGenerator
from cpkg.generators.ninja_syntax import Writer

__version__ = "1.0.0"

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Core classes
    "BuildType",
    "CpkgError",
    "Dependency",
    "ExportedFlags",
    "Project",
    # Generators
    "NinjaGenerator",
    "Writer",
]
