"""Require a line break at the end of a non-empty file."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.lines import Line
from yamlscope.rules.base import LineRule
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class NewLineAtEndOfFileRule(LineRule):
    @property
    def id(self) -> str:
        return "new-line-at-end-of-file"

    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        if line.end == len(line.buffer) and line.end > line.start:
            yield LintProblem(
                line=line.line_no,
                column=line.end - line.start + 1,
                desc="no new line character at the end of file",
            )
