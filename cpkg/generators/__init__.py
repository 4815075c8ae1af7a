# SPDX-License-Identifier: MIT
"""Build file generators for cpkg."""

from cpkg.generators.generator import BaseGenerator
from cpkg.generators.ninja import NinjaGenerator
from cpkg.generators.ninja_syntax import Writer

__all__ = [
    "BaseGenerator",
    "NinjaGenerator",
    "Writer",
]
