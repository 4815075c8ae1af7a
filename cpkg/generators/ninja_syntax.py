# SPDX-License-Identifier: MIT
"""Low-level writer for the ninja manifest format.

The Writer knows ninja's lexical rules (line continuation, escaping,
nested variable scopes) and nothing about projects or toolchains.
Output accumulates in an in-memory buffer until the caller collects it
with getvalue().

Example:
    writer = Writer()
    writer.rule("cc", "gcc -c $in -o $out")
    writer.build("foo.o", "cc", "foo.c")
    text = writer.getvalue()
"""

from __future__ import annotations

import io
import re
import textwrap
from collections.abc import Iterable, Mapping
from typing import Union

from cpkg.core.errors import InvalidManifestTextError

# A scalar or list value for a ninja variable.
VariableValue = Union[bool, int, float, str, list[str], None]

# A path list argument: one path, several, or nothing.
PathList = Union[str, list[str], None]

# Per-edge overrides: a single (key, value) pair, a mapping, or pairs.
EdgeVariables = Union[
    tuple[str, Union[str, list[str], None]],
    Mapping[str, Union[str, list[str], None]],
    Iterable[tuple[str, Union[str, list[str], None]]],
    None,
]

_VARIABLE_RE = re.compile(r"\$(\$|\w*)")


def escape_path(word: str) -> str:
    """Escape a path for use in a build statement.

    Already-escaped spaces are protected first so the bare-space pass
    does not escape them twice; colons are escaped last.
    """
    return word.replace("$ ", "$$ ").replace(" ", "$ ").replace(":", "$:")


def escape(string: str) -> str:
    """Escape a string so ninja does not expand anything in it.

    Raises:
        InvalidManifestTextError: If the string contains a newline.
    """
    if "\n" in string:
        raise InvalidManifestTextError("ninja syntax does not allow newlines")
    return string.replace("$", "$$")


def as_list(value: PathList) -> list[str]:
    """Coerce None, a single string, or a list into a list of strings."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def expand(
    string: str,
    vars: Mapping[str, str],
    local_vars: Mapping[str, str] | None = None,
) -> str:
    """Expand $var references the way ninja does.

    Local variables shadow global ones; unknown variables expand to the
    empty string and $$ becomes a literal $.
    """
    local_vars = local_vars or {}

    def exp(m: re.Match[str]) -> str:
        var = m.group(1)
        if var == "$":
            return "$"
        return local_vars.get(var, vars.get(var, ""))

    return _VARIABLE_RE.sub(exp, string)


def _format_value(value: bool | int | float | str | list[str]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return " ".join(v for v in value if v and not v.isspace())
    if isinstance(value, float):
        # Fixed notation with six decimals; ninja has no exponent syntax.
        return format(value, "f")
    return str(value)


class Writer:
    """Renders ninja constructs into a text buffer.

    Attributes:
        width: Preferred maximum line length. Longer lines are continued
            with a trailing '$' where a split point exists.
    """

    def __init__(self, width: int = 78) -> None:
        self.width = width
        self._buf = io.StringIO()

    def newline(self) -> None:
        self._buf.write("\n")

    def comment(self, text: str, *, break_long_words: bool = False) -> None:
        """Write a comment, wrapped on word boundaries."""
        for line in textwrap.wrap(
            text,
            self.width - 2,
            break_long_words=break_long_words,
            break_on_hyphens=False,
        ):
            self._buf.write("# " + line + "\n")

    def variable(self, key: str, value: VariableValue, indent: int = 0) -> None:
        if value is None:
            return
        self._line(f"{key} = {_format_value(value)}", indent)

    def pool(self, name: str, depth: int) -> None:
        self._line(f"pool {name}")
        self.variable("depth", depth, indent=1)

    def rule(
        self,
        name: str,
        command: str,
        description: str | None = None,
        depfile: str | None = None,
        generator: bool = False,
        pool: str | None = None,
        restat: bool = False,
        rspfile: str | None = None,
        rspfile_content: str | None = None,
        deps: str | list[str] | None = None,
    ) -> None:
        self._line(f"rule {name}")
        self.variable("command", command, indent=1)
        if description is not None:
            self.variable("description", description, indent=1)
        if depfile is not None:
            self.variable("depfile", depfile, indent=1)
        if generator:
            self.variable("generator", "1", indent=1)
        if pool is not None:
            self.variable("pool", pool, indent=1)
        if restat:
            self.variable("restat", "1", indent=1)
        if rspfile is not None:
            self.variable("rspfile", rspfile, indent=1)
        if rspfile_content is not None:
            self.variable("rspfile_content", rspfile_content, indent=1)
        if deps is not None:
            self.variable("deps", deps, indent=1)

    def build(
        self,
        outputs: str | list[str],
        rule: str,
        inputs: PathList = None,
        implicit: PathList = None,
        order_only: PathList = None,
        variables: EdgeVariables = None,
        implicit_outputs: PathList = None,
        pool: str | None = None,
        dyndep: str | None = None,
    ) -> list[str]:
        """Write a build edge.

        Args:
            outputs: Explicit outputs of the edge.
            rule: Rule that produces the outputs.
            inputs: Explicit inputs ($in).
            implicit: Implicit inputs (after '|').
            order_only: Order-only inputs (after '||').
            variables: Edge-local variable overrides. A key whose value is
                None is written with an empty value, unsetting an inherited
                variable for this edge only.
            implicit_outputs: Outputs not listed in $out.
            pool: Pool to run the edge in.
            dyndep: Dynamic dependency file.

        Returns:
            The unescaped explicit outputs, for chaining into later edges.
        """
        outputs = as_list(outputs)
        out_outputs = [escape_path(x) for x in outputs]
        all_inputs = [escape_path(x) for x in as_list(inputs)]

        if implicit:
            all_inputs.append("|")
            all_inputs.extend(escape_path(x) for x in as_list(implicit))
        if order_only:
            all_inputs.append("||")
            all_inputs.extend(escape_path(x) for x in as_list(order_only))
        if implicit_outputs:
            out_outputs.append("|")
            out_outputs.extend(escape_path(x) for x in as_list(implicit_outputs))

        self._line(
            "build {}: {}".format(" ".join(out_outputs), " ".join([rule, *all_inputs]))
        )
        if pool is not None:
            self._line(f"  pool = {pool}")
        if dyndep is not None:
            self._line(f"  dyndep = {dyndep}")

        for key, value in _edge_variables(variables):
            if value is None:
                self._line(f"{key} = ", indent=1)
            else:
                self.variable(key, value, indent=1)

        return outputs

    def include(self, path: str) -> None:
        self._line(f"include {path}")

    def subninja(self, path: str) -> None:
        self._line(f"subninja {path}")

    def default(self, paths: str | list[str]) -> None:
        self._line("default {}".format(" ".join(as_list(paths))))

    def getvalue(self) -> str:
        """Get everything written so far."""
        return self._buf.getvalue()

    def reset(self) -> None:
        """Discard everything written so far. The width is kept."""
        self._buf = io.StringIO()

    @staticmethod
    def _count_dollars_before_index(s: str, i: int) -> int:
        """Count the run of '$' characters immediately before s[i]."""
        dollar_count = 0
        dollar_index = i - 1
        while dollar_index >= 0 and s[dollar_index] == "$":
            dollar_count += 1
            dollar_index -= 1
        return dollar_count

    def _line(self, text: str, indent: int = 0) -> None:
        """Write 'text' word-wrapped at self.width characters."""
        leading_space = "  " * indent
        while len(leading_space) + len(text) > self.width:
            # The text is too wide; wrap if possible.

            # Find the rightmost space that would obey our width constraint
            # and that's not an escaped space.
            available_space = self.width - len(leading_space) - len(" $")
            space = available_space
            while True:
                space = text.rfind(" ", 0, space)
                if space < 0 or self._count_dollars_before_index(text, space) % 2 == 0:
                    break

            if space < 0:
                # No such space; just use the first unescaped space we can find.
                space = available_space - 1
                while True:
                    space = text.find(" ", space + 1)
                    if (
                        space < 0
                        or self._count_dollars_before_index(text, space) % 2 == 0
                    ):
                        break
            if space < 0:
                # Give up on breaking.
                break

            self._buf.write(leading_space + text[0:space] + " $\n")
            text = text[space + 1 :]

            # Subsequent lines are continuations, so indent them.
            leading_space = "  " * (indent + 2)

        self._buf.write(leading_space + text + "\n")


def _edge_variables(
    variables: EdgeVariables,
) -> Iterable[tuple[str, str | list[str] | None]]:
    if not variables:
        return ()
    if isinstance(variables, Mapping):
        return variables.items()
    if (
        isinstance(variables, tuple)
        and len(variables) == 2
        and isinstance(variables[0], str)
    ):
        return (variables,)
    return variables
