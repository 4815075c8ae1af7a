# SPDX-License-Identifier: MIT
"""GCC toolchain implementation.

Provides the GCC-based C and C++ compilation toolchain:
- GCC C compiler (gcc)
- GCC C++ compiler (g++)
- GNU archiver (ar)
- Linker (using g++)
"""

from __future__ import annotations

from typing import Any

from cpkg.tools.toolchain import BaseToolchain


class GccToolchain(BaseToolchain):
    """GCC toolchain.

    Compile rules ask the compiler for a Makefile-style depfile so ninja
    tracks header dependencies ('deps = gcc').
    """

    # Executables, keyed by role. Subclasses for other GCC-compatible
    # drivers replace this table.
    TOOLS: dict[str, str] = {
        "cc": "gcc",
        "cxx": "g++",
        "ld": "g++",
        "ar": "ar",
    }

    VARIANT_FLAGS: dict[str, list[str]] = {
        "debug": ["-g", "-O0"],
        "release": ["-O2", "-DNDEBUG"],
    }

    def __init__(self, name: str = "gcc") -> None:
        super().__init__(name)

    @property
    def tools(self) -> dict[str, str]:
        return dict(self.TOOLS)

    def variant_flags(self, variant: str) -> list[str]:
        return list(self.VARIANT_FLAGS.get(variant, []))

    def rules(self) -> dict[str, dict[str, Any]]:
        cc = self.tool_variable("cc")
        cxx = self.tool_variable("cxx")
        ld = self.tool_variable("ld")
        ar = self.tool_variable("ar")
        return {
            self.rule_name("cc"): {
                "command": f"${cc} -MD -MF $out.d $cflags -c $in -o $out",
                "description": "CC $out",
                "depfile": "$out.d",
                "deps": "gcc",
            },
            self.rule_name("cxx"): {
                "command": f"${cxx} -MD -MF $out.d $cxxflags -c $in -o $out",
                "description": "CXX $out",
                "depfile": "$out.d",
                "deps": "gcc",
            },
            self.rule_name("ld"): {
                "command": f"${ld} $in $ldflags -o $out",
                "description": "LINK $out",
            },
            self.rule_name("ar"): {
                "command": f"${ar} rcs $out $in",
                "description": "AR $out",
            },
        }
