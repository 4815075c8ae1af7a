# SPDX-License-Identifier: MIT
"""MSVC toolchain implementation (Windows only).

Differences from GCC-style drivers that the generator needs to know:
- include flags use '/I'
- project library directories are not passed to the linker
- libraries built by other projects are found through /LIBPATH only,
  since link.exe has no link-by-name flag
- external library files are passed as /LIBPATH:"<path>"
"""

from __future__ import annotations

from typing import Any

from cpkg.tools.toolchain import BaseToolchain


class MsvcToolchain(BaseToolchain):
    """MSVC toolchain (cl, link, lib).

    Compile rules pass /showIncludes so ninja can track header
    dependencies ('deps = msvc').
    """

    include_prefix = "/I"
    supports_library_dirs = False

    VARIANT_FLAGS: dict[str, list[str]] = {
        "debug": ["/Zi", "/Od"],
        "release": ["/O2", "/DNDEBUG"],
    }

    def __init__(self, name: str = "msvc") -> None:
        super().__init__(name)

    @property
    def tools(self) -> dict[str, str]:
        return {
            "cc": "cl",
            "cxx": "cl",
            "ld": "link",
            "ar": "lib",
        }

    def variant_flags(self, variant: str) -> list[str]:
        return list(self.VARIANT_FLAGS.get(variant, []))

    def project_library_flags(self, directory: str, name: str) -> list[str]:
        return [f'/LIBPATH:"{directory}"']

    def library_file_flags(self, paths: list[str]) -> list[str]:
        return [f'/LIBPATH:"{path}"' for path in paths]

    def rules(self) -> dict[str, dict[str, Any]]:
        cc = self.tool_variable("cc")
        cxx = self.tool_variable("cxx")
        ld = self.tool_variable("ld")
        ar = self.tool_variable("ar")
        return {
            self.rule_name("cc"): {
                "command": f"${cc} /nologo /showIncludes $cflags /c $in /Fo$out",
                "description": "CC $out",
                "deps": "msvc",
            },
            self.rule_name("cxx"): {
                "command": f"${cxx} /nologo /showIncludes $cxxflags /c $in /Fo$out",
                "description": "CXX $out",
                "deps": "msvc",
            },
            self.rule_name("ld"): {
                "command": f"${ld} /nologo $in $ldflags /OUT:$out",
                "description": "LINK $out",
            },
            self.rule_name("ar"): {
                "command": f"${ar} /nologo $in /OUT:$out",
                "description": "LIB $out",
            },
        }
