"""Forbid spaces and tabs at the end of lines."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.lines import Line
from yamlscope.rules.base import LineRule
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class TrailingSpacesRule(LineRule):
    @property
    def id(self) -> str:
        return "trailing-spaces"

    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        if line.end == line.start:
            return
        pos = line.end
        while pos > line.start and line.buffer[pos - 1] in " \t":
            pos -= 1
        if pos != line.end:
            yield LintProblem(line=line.line_no, column=pos - line.start + 1, desc="trailing spaces")
