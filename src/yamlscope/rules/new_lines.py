"""Enforce the line ending type: ``unix`` (``\\n``), ``dos`` (``\\r\\n``)
or ``platform`` (whatever the running system uses)."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.lines import Line
from yamlscope.rules.base import LineRule, OptionSpec
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class NewLinesRule(LineRule):
    @property
    def id(self) -> str:
        return "new-lines"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"type": ("unix", "dos", "platform")}

    @property
    def default(self) -> dict[str, Any]:
        return {"type": "unix"}

    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        if conf["type"] == "platform":
            expected = "dos" if os.linesep == "\r\n" else "unix"
        else:
            expected = conf["type"]

        buffer = line.buffer
        if line.end >= len(buffer):
            return
        is_dos = buffer[line.end:line.end + 2] == "\r\n"
        if expected == "unix" and is_dos:
            yield LintProblem(
                line=line.line_no,
                column=line.end - line.start + 1,
                desc="wrong new line character: expected \\n",
            )
        elif expected == "dos" and not is_dos and buffer[line.end] == "\n":
            yield LintProblem(
                line=line.line_no,
                column=line.end - line.start + 1,
                desc="wrong new line character: expected \\r\\n",
            )
