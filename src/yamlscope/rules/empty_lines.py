"""Limit consecutive blank lines.

Options:

* ``max``: blank lines allowed anywhere in the document
* ``max-start``: blank lines allowed at the beginning of the file
* ``max-end``: blank lines allowed at the end of the file
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.lines import Line
from yamlscope.rules.base import LineRule, OptionSpec
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class EmptyLinesRule(LineRule):
    @property
    def id(self) -> str:
        return "empty-lines"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"max": int, "max-start": int, "max-end": int}

    @property
    def default(self) -> dict[str, Any]:
        return {"max": 2, "max-start": 0, "max-end": 0}

    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        buffer = line.buffer
        if line.start != line.end or line.end >= len(buffer):
            return

        # Report only on the last blank line of a run
        if buffer[line.end:line.end + 2] == "\n\n" or buffer[line.end:line.end + 4] == "\r\n\r\n":
            return

        blank_lines = 0
        start = line.start
        while start >= 2 and buffer[start - 2:start] == "\r\n":
            blank_lines += 1
            start -= 2
        while start >= 1 and buffer[start - 1] == "\n":
            blank_lines += 1
            start -= 1

        max_lines = conf["max"]
        if start == 0:
            # The first line has no preceding line break
            blank_lines += 1
            max_lines = conf["max-start"]

        # The last line of a file always ends with a line break
        if (line.end == len(buffer) - 1 and buffer[line.end] == "\n") or (
            line.end == len(buffer) - 2 and buffer[line.end:line.end + 2] == "\r\n"
        ):
            # A file holding a single line break is fine
            if line.end == 0:
                return
            max_lines = conf["max-end"]

        if blank_lines > max_lines:
            yield LintProblem(
                line=line.line_no,
                column=1,
                desc=f"too many blank lines ({blank_lines} > {max_lines})",
            )
