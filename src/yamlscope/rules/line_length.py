"""Limit the length of lines.

``allow-non-breakable-words`` tolerates long lines made of a single word
(such as a URL), optionally after a list dash or comment marker.
``allow-non-breakable-inline-mappings`` extends that to ``key: word``
lines and implies ``allow-non-breakable-words``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.lines import Line
from yamlscope.parser.scanner import Scanner, ScannerError
from yamlscope.parser.tokens import TokenKind
from yamlscope.rules.base import LineRule, OptionSpec
from yamlscope.rules.registry import RuleRegistry


def check_inline_mapping(line: Line) -> bool:
    """True when the line is ``key: value`` with a value free of spaces."""
    scanner = Scanner(line.content)
    try:
        while scanner.check_token():
            if scanner.get_token().kind is TokenKind.BLOCK_MAPPING_START:
                while scanner.check_token():
                    if scanner.get_token().kind is TokenKind.VALUE:
                        token = scanner.get_token()
                        if token is not None and token.kind is TokenKind.SCALAR:
                            return " " not in line.content[token.start_mark.column:]
    except ScannerError:
        pass
    return False


@RuleRegistry.register
class LineLengthRule(LineRule):
    @property
    def id(self) -> str:
        return "line-length"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "max": int,
            "allow-non-breakable-words": bool,
            "allow-non-breakable-inline-mappings": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "max": 80,
            "allow-non-breakable-words": True,
            "allow-non-breakable-inline-mappings": False,
        }

    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        length = line.end - line.start
        if length <= conf["max"]:
            return

        allow_words = (
            conf["allow-non-breakable-words"] or conf["allow-non-breakable-inline-mappings"]
        )
        if allow_words:
            start = line.start
            while start < line.end and line.buffer[start] == " ":
                start += 1

            if start != line.end:
                if line.buffer[start] == "#":
                    while start < line.end and line.buffer[start] == "#":
                        start += 1
                    start += 1
                elif line.buffer[start] == "-":
                    start += 2

                if line.buffer.find(" ", start, line.end) == -1:
                    return

                if conf["allow-non-breakable-inline-mappings"] and check_inline_mapping(line):
                    return

        yield LintProblem(
            line=line.line_no,
            column=conf["max"] + 1,
            desc=f"line too long ({length} > {conf['max']} characters)",
        )
