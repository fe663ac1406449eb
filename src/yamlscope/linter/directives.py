"""Inline ``# yamllint ...`` directives that silence rules.

``disable`` and ``enable`` change the state from the line of the comment
onward.  ``disable-line`` silences its own line when written after
content, or the next line when written on a line of its own.
"""

from __future__ import annotations

import bisect
import re
from collections.abc import Iterable

from yamlscope.models.problems import LintProblem
from yamlscope.parser.comments import Comment

DISABLE_RE = re.compile(r"^#\s*yamllint\s+disable(\s+rule:\S+)*\s*$")
ENABLE_RE = re.compile(r"^#\s*yamllint\s+enable(\s+rule:\S+)*\s*$")
DISABLE_LINE_RE = re.compile(r"^#\s*yamllint\s+disable-line(\s+rule:\S+)*\s*$")
DISABLE_FILE_RE = re.compile(r"^#\s*yamllint\s+disable-file\s*$")
RULE_ARG_RE = re.compile(r"rule:(\S+)")


def _rule_ids(comment: str) -> list[str]:
    """Return the ids of the ``rule:ID`` arguments of a directive."""
    return RULE_ARG_RE.findall(comment)


class DirectiveFilter:
    """Which rules are silenced on which line.

    Built from the comments of one document; only rules in ``all_rules``
    can be disabled, unknown ids in directives are ignored.
    """

    def __init__(self, comments: Iterable[Comment], all_rules: Iterable[str]) -> None:
        self.all_rules = frozenset(all_rules)
        self._lines: list[int] = []
        self._states: list[frozenset[str]] = []
        self._single_lines: dict[int, set[str]] = {}
        self._process(comments)

    def _process(self, comments: Iterable[Comment]) -> None:
        disabled: set[str] = set()
        for comment in comments:
            text = comment.content.rstrip("\r")
            if DISABLE_RE.match(text):
                rules = _rule_ids(text)
                if rules:
                    disabled |= self.all_rules.intersection(rules)
                else:
                    disabled = set(self.all_rules)
                self._snapshot(comment.line_no, disabled)
            elif ENABLE_RE.match(text):
                rules = _rule_ids(text)
                if rules:
                    disabled -= set(rules)
                else:
                    disabled = set()
                self._snapshot(comment.line_no, disabled)
            elif DISABLE_LINE_RE.match(text):
                line_no = comment.line_no if comment.is_inline() else comment.line_no + 1
                rules = _rule_ids(text)
                silenced = self._single_lines.setdefault(line_no, set())
                if rules:
                    silenced |= self.all_rules.intersection(rules)
                else:
                    silenced |= self.all_rules

    def _snapshot(self, line_no: int, disabled: set[str]) -> None:
        # Several directives on one line: the last one wins
        if self._lines and self._lines[-1] == line_no:
            self._states[-1] = frozenset(disabled)
        else:
            self._lines.append(line_no)
            self._states.append(frozenset(disabled))

    def disabled_rules(self, line_no: int) -> frozenset[str]:
        """Rules silenced on the given 1-based line."""
        index = bisect.bisect_right(self._lines, line_no) - 1
        disabled = self._states[index] if index >= 0 else frozenset()
        return disabled | self._single_lines.get(line_no, set())

    def is_disabled(self, problem: LintProblem) -> bool:
        return problem.rule in self.disabled_rules(problem.line)

    def filter(self, problems: Iterable[LintProblem]) -> list[LintProblem]:
        return [problem for problem in problems if not self.is_disabled(problem)]


def is_file_disabled(first_line: str) -> bool:
    """True when the first line carries ``# yamllint disable-file``."""
    return DISABLE_FILE_RE.match(first_line.rstrip("\r")) is not None
