# SPDX-License-Identifier: MIT
"""Tests for cpkg.generators.ninja_syntax."""

import pytest

from cpkg.core.errors import InvalidManifestTextError
from cpkg.generators.ninja_syntax import Writer, as_list, escape, escape_path, expand

LONGWORD = "a" * 10
LONGWORDWITHSPACES = "a" * 5 + "$ " + "a" * 5
INDENT = "    "


class TestLineWrapping:
    def test_single_long_word(self):
        # A single long word is never wrapped.
        n = Writer(width=8)
        n._line(LONGWORD)
        assert n.getvalue() == LONGWORD + "\n"

    def test_few_long_words(self):
        n = Writer(width=8)
        n._line(" ".join(["x", LONGWORD, "y"]))
        assert n.getvalue() == " $\n".join(["x", INDENT + LONGWORD, INDENT + "y"]) + "\n"

    def test_few_long_words_indented(self):
        n = Writer(width=8)
        n._line(" ".join(["x", LONGWORD, "y"]), 1)
        assert (
            n.getvalue()
            == " $\n".join(["  x", "  " + INDENT + LONGWORD, "  " + INDENT + "y"])
            + "\n"
        )

    def test_short_words_indented(self):
        # Continuation lines count their indent against the width.
        n = Writer(width=8)
        n._line("line_one to tree")
        assert n.getvalue() == "line_one $\n    to $\n    tree\n"

    def test_escaped_spaces_are_not_split_points(self):
        n = Writer(width=8)
        n._line(" ".join(["x", LONGWORDWITHSPACES, "y"]))
        assert (
            n.getvalue()
            == " $\n".join(["x", INDENT + LONGWORDWITHSPACES, INDENT + "y"]) + "\n"
        )

    def test_fit_many_words(self):
        n = Writer(width=78)
        n._line(
            "command = cd ../../chrome; python ../tools/grit/grit/format/repack.py "
            "../out/Debug/obj/chrome/chrome_dll.gen/repack/theme_resources_large.pak "
            "../out/Debug/gen/chrome/theme_resources_large.pak",
            1,
        )
        assert n.getvalue() == (
            "  command = cd ../../chrome; python ../tools/grit/grit/format/repack.py $\n"
            "      ../out/Debug/obj/chrome/chrome_dll.gen/repack/theme_resources_large.pak $\n"
            "      ../out/Debug/gen/chrome/theme_resources_large.pak\n"
        )

    def test_short_line_is_not_wrapped(self):
        n = Writer()
        n._line("build a.o: gcc_cc a.c")
        assert n.getvalue() == "build a.o: gcc_cc a.c\n"

    def test_leading_space(self):
        n = Writer(width=14)
        n.variable("foo", ["", "-bar", "-somethinglonger"], 0)
        assert n.getvalue() == "foo = -bar $\n    -somethinglonger\n"

    def test_embedded_dollar_dollar(self):
        n = Writer(width=15)
        n.variable("foo", ["a$$b", "-somethinglonger"], 0)
        assert n.getvalue() == "foo = a$$b $\n    -somethinglonger\n"

    def test_two_embedded_dollar_dollars(self):
        n = Writer(width=17)
        n.variable("foo", ["a$$b", "-somethinglonger"], 0)
        assert n.getvalue() == "foo = a$$b $\n    -somethinglonger\n"

    def test_leading_dollar_dollar(self):
        n = Writer(width=14)
        n.variable("foo", ["$$b", "-somethinglonger"], 0)
        assert n.getvalue() == "foo = $$b $\n    -somethinglonger\n"

    def test_trailing_dollar_dollar(self):
        # An even run of '$' before a space means the space is a real break.
        n = Writer(width=14)
        n.variable("foo", ["a$$", "-somethinglonger"], 0)
        assert n.getvalue() == "foo = a$$ $\n    -somethinglonger\n"

    def test_count_dollars_before_index(self):
        assert Writer._count_dollars_before_index("a$$ b", 3) == 2
        assert Writer._count_dollars_before_index("ab$ c", 3) == 1
        assert Writer._count_dollars_before_index("abc d", 3) == 0
        assert Writer._count_dollars_before_index("$ x", 1) == 1
        assert Writer._count_dollars_before_index("$$ x", 2) == 2

    def test_escaped_space_at_start_is_not_a_split_point(self):
        n = Writer(width=8)
        n._line("$ " + LONGWORD)
        assert n.getvalue() == "$ " + LONGWORD + "\n"


class TestComment:
    def test_short_comment(self):
        n = Writer()
        n.comment("Hello")
        assert n.getvalue() == "# Hello\n"

    def test_comment_wraps_on_words(self):
        n = Writer(width=20)
        n.comment("one two three four five six")
        assert n.getvalue() == "# one two three four\n# five six\n"

    def test_long_words_are_kept_whole(self):
        path = "/usr/local/build-tools/bin/compiler"
        n = Writer(width=20)
        n.comment(f"Hello {path}")
        assert n.getvalue() == f"# Hello\n# {path}\n"

    def test_long_words_can_be_broken(self):
        n = Writer(width=8)
        n.comment("abcdefghij", break_long_words=True)
        assert n.getvalue() == "# abcdef\n# ghij\n"


class TestVariable:
    def test_string(self):
        n = Writer()
        n.variable("cc", "gcc")
        assert n.getvalue() == "cc = gcc\n"

    def test_indented(self):
        n = Writer()
        n.variable("depth", 4, indent=1)
        assert n.getvalue() == "  depth = 4\n"

    def test_none_is_skipped(self):
        n = Writer()
        n.variable("cc", None)
        assert n.getvalue() == ""

    def test_empty_string_is_written(self):
        n = Writer()
        n.variable("cflags", "")
        assert n.getvalue() == "cflags = \n"

    def test_list_drops_blank_entries(self):
        n = Writer()
        n.variable("cflags", ["-Wall", "", "  ", "-O2"])
        assert n.getvalue() == "cflags = -Wall -O2\n"

    def test_bool_and_float(self):
        n = Writer()
        n.variable("enabled", True)
        n.variable("disabled", False)
        n.variable("ratio", 0.5)
        assert n.getvalue() == "enabled = true\ndisabled = false\nratio = 0.500000\n"

    def test_small_float_uses_fixed_notation(self):
        n = Writer()
        n.variable("x", 1e-05)
        n.variable("y", 3.0)
        assert n.getvalue() == "x = 0.000010\ny = 3.000000\n"


class TestRule:
    def test_minimal_rule(self):
        n = Writer()
        n.rule("cc", "gcc -c $in -o $out")
        assert n.getvalue() == "rule cc\n  command = gcc -c $in -o $out\n"

    def test_rule_attributes_in_order(self):
        n = Writer()
        n.rule(
            "cc",
            "gcc -c $in -o $out",
            description="CC $out",
            depfile="$out.d",
            generator=True,
            pool="console",
            restat=True,
            rspfile="$out.rsp",
            rspfile_content="$in",
            deps="gcc",
        )
        assert n.getvalue() == (
            "rule cc\n"
            "  command = gcc -c $in -o $out\n"
            "  description = CC $out\n"
            "  depfile = $out.d\n"
            "  generator = 1\n"
            "  pool = console\n"
            "  restat = 1\n"
            "  rspfile = $out.rsp\n"
            "  rspfile_content = $in\n"
            "  deps = gcc\n"
        )

    def test_empty_attributes_are_written(self):
        n = Writer()
        n.rule("cc", "cmd", description="", deps="")
        assert n.getvalue() == (
            "rule cc\n  command = cmd\n  description = \n  deps = \n"
        )


class TestBuild:
    def test_simple_edge(self):
        n = Writer()
        n.build("out", "cc", "in")
        assert n.getvalue() == "build out: cc in\n"

    def test_returns_unescaped_outputs(self):
        n = Writer()
        outputs = n.build("my file.o", "cc", "my file.c")
        assert outputs == ["my file.o"]
        assert n.getvalue() == "build my$ file.o: cc my$ file.c\n"

    def test_no_inputs(self):
        n = Writer()
        n.build("out", "phony")
        assert n.getvalue() == "build out: phony\n"

    def test_implicit_and_order_only(self):
        n = Writer()
        n.build("out", "cc", ["a", "b"], implicit="h", order_only=["gen"])
        assert n.getvalue() == "build out: cc a b | h || gen\n"

    def test_implicit_outputs(self):
        n = Writer()
        n.build("o", "cc", "i", implicit_outputs="io")
        assert n.getvalue() == "build o | io: cc i\n"

    def test_variables_dict(self):
        n = Writer()
        n.build("out", "cc", "in", variables={"name": "value"})
        assert n.getvalue() == "build out: cc in\n  name = value\n"

    def test_variables_list(self):
        n = Writer()
        n.build("out", "cc", "in", variables=[("name", "value")])
        assert n.getvalue() == "build out: cc in\n  name = value\n"

    def test_single_variable_pair(self):
        n = Writer()
        n.build("out", "cc", "in", variables=("name", ["a", "b"]))
        assert n.getvalue() == "build out: cc in\n  name = a b\n"

    def test_none_variable_unsets(self):
        n = Writer()
        n.build("out", "cc", "in", variables={"cflags": None})
        assert n.getvalue() == "build out: cc in\n  cflags = \n"

    def test_pool_and_dyndep(self):
        n = Writer()
        n.build("out", "cc", "in", pool="console", dyndep="out.dd")
        assert n.getvalue() == "build out: cc in\n  pool = console\n  dyndep = out.dd\n"

    def test_colon_in_path(self):
        n = Writer()
        n.build("c:/out.o", "cc", "c:/in.c")
        assert n.getvalue() == "build c$:/out.o: cc c$:/in.c\n"


class TestOtherStatements:
    def test_pool(self):
        n = Writer()
        n.pool("link_pool", 2)
        assert n.getvalue() == "pool link_pool\n  depth = 2\n"

    def test_include_and_subninja(self):
        n = Writer()
        n.include("rules.ninja")
        n.subninja("sub/build.ninja")
        assert n.getvalue() == "include rules.ninja\nsubninja sub/build.ninja\n"

    def test_default(self):
        n = Writer()
        n.default(["a", "b"])
        n.default("c")
        assert n.getvalue() == "default a b\ndefault c\n"

    def test_newline(self):
        n = Writer()
        n.newline()
        assert n.getvalue() == "\n"

    def test_reset(self):
        n = Writer(width=40)
        n.variable("x", "1")
        n.reset()
        assert n.getvalue() == ""
        assert n.width == 40
        n.variable("y", "2")
        assert n.getvalue() == "y = 2\n"


class TestEscaping:
    def test_escape(self):
        assert escape("a$b") == "a$$b"
        assert escape("plain") == "plain"

    def test_escape_rejects_newline(self):
        with pytest.raises(InvalidManifestTextError):
            escape("a\nb")

    def test_escape_path(self):
        assert escape_path("foo bar:baz") == "foo$ bar$:baz"
        assert escape_path("plain/path.c") == "plain/path.c"

    def test_escape_path_keeps_escaped_space_escaped(self):
        # "$ " becomes a literal "$" followed by an escaped space.
        assert escape_path("a$ b") == "a$$$ b"

    def test_as_list(self):
        assert as_list(None) == []
        assert as_list("a") == ["a"]
        assert as_list(["a", "b"]) == ["a", "b"]


class TestExpand:
    def test_basic(self):
        assert expand("foo", {"x": "X"}) == "foo"

    def test_var(self):
        assert expand("foo $x bar", {"x": "X"}) == "foo X bar"

    def test_vars(self):
        assert expand("$x $y", {"x": "a", "y": "b"}) == "a b"

    def test_unknown_var_is_empty(self):
        assert expand("[$nope]", {}) == "[]"

    def test_space(self):
        assert expand("foo$ bar", {}) == "foo bar"

    def test_locals_shadow_globals(self):
        assert expand("$x", {"x": "a"}, {"x": "b"}) == "b"

    def test_double(self):
        assert expand("a$ b$$c", {}) == "a b$c"
