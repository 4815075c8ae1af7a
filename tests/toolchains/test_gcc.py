# SPDX-License-Identifier: MIT
"""Tests for cpkg.toolchains.gcc."""

from cpkg.toolchains.gcc import GccToolchain
from cpkg.tools.toolchain import BaseToolchain


class TestGccToolchain:
    def test_creation(self):
        tc = GccToolchain()
        assert isinstance(tc, BaseToolchain)
        assert tc.name == "gcc"

    def test_tools(self):
        tc = GccToolchain()
        assert tc.tools == {"cc": "gcc", "cxx": "g++", "ld": "g++", "ar": "ar"}

    def test_tool_variables(self):
        tc = GccToolchain()
        assert list(tc.tool_variables().items()) == [
            ("gcc_cc", "gcc"),
            ("gcc_cxx", "g++"),
            ("gcc_ld", "g++"),
            ("gcc_ar", "ar"),
        ]

    def test_rule_names(self):
        tc = GccToolchain()
        assert list(tc.rules()) == ["gcc_cc", "gcc_cxx", "gcc_ld", "gcc_ar"]
        assert tc.rule_name("ld") == "gcc_ld"

    def test_compile_rules_track_headers(self):
        rules = GccToolchain().rules()
        cc = rules["gcc_cc"]
        assert cc["command"] == "$gcc_cc -MD -MF $out.d $cflags -c $in -o $out"
        assert cc["depfile"] == "$out.d"
        assert cc["deps"] == "gcc"
        assert "$cxxflags" in rules["gcc_cxx"]["command"]
        assert rules["gcc_cxx"]["command"].startswith("$gcc_cxx ")

    def test_link_and_archive_rules(self):
        rules = GccToolchain().rules()
        assert rules["gcc_ld"]["command"] == "$gcc_ld $in $ldflags -o $out"
        assert rules["gcc_ar"]["command"] == "$gcc_ar rcs $out $in"
        assert "deps" not in rules["gcc_ld"]

    def test_flag_spelling(self):
        tc = GccToolchain()
        assert tc.include_flags(["inc", "a b"]) == ["-Iinc", "-Ia b"]
        assert tc.library_dir_flags(["lib"]) == ["-Llib"]
        assert tc.project_library_flags("out", "core") == ["-Lout", "-lcore"]
        assert tc.library_file_flags(["/usr/lib/libz.a"]) == ["/usr/lib/libz.a"]

    def test_variant_flags(self):
        tc = GccToolchain()
        assert tc.variant_flags("debug") == ["-g", "-O0"]
        assert tc.variant_flags("release") == ["-O2", "-DNDEBUG"]
        assert tc.variant_flags("other") == []

    def test_variant_flags_are_copies(self):
        tc = GccToolchain()
        tc.variant_flags("debug").append("-x")
        assert tc.variant_flags("debug") == ["-g", "-O0"]

    def test_repr(self):
        assert repr(GccToolchain()) == "GccToolchain('gcc', tools=[gcc, g++, g++, ar])"
