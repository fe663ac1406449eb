"""Report undeclared aliases, duplicated anchors and unused anchors.

Anchors are scoped to a document: the anchor table is reset on every
document boundary, and unused anchors are reported when it closes.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry

_DOCUMENT_BOUNDARIES = (
    TokenKind.STREAM_START,
    TokenKind.DOCUMENT_START,
    TokenKind.DOCUMENT_END,
)


@RuleRegistry.register
class AnchorsRule(TokenRule):
    @property
    def id(self) -> str:
        return "anchors"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "forbid-undeclared-aliases": bool,
            "forbid-duplicated-anchors": bool,
            "forbid-unused-anchors": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "forbid-undeclared-aliases": True,
            "forbid-duplicated-anchors": False,
            "forbid-unused-anchors": False,
        }

    def create_context(self) -> dict[str, Any]:
        return {"anchors": {}}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        anchors: dict[str, dict[str, Any]] = context["anchors"]

        if (
            conf["forbid-unused-anchors"]
            and token.kind in (TokenKind.STREAM_END, TokenKind.DOCUMENT_START, TokenKind.DOCUMENT_END)
        ):
            for name, info in anchors.items():
                if not info["used"]:
                    yield LintProblem(
                        line=info["line"] + 1,
                        column=info["column"] + 1,
                        desc=f'found unused anchor "{name}"',
                    )

        if token.kind in _DOCUMENT_BOUNDARIES:
            anchors.clear()
            return

        if token.kind is TokenKind.ALIAS:
            info = anchors.get(token.value)
            if info is None:
                if conf["forbid-undeclared-aliases"]:
                    yield LintProblem(
                        line=token.start_mark.line + 1,
                        column=token.start_mark.column + 1,
                        desc=f'found undeclared alias "{token.value}"',
                    )
            else:
                info["used"] = True
        elif token.kind is TokenKind.ANCHOR:
            if conf["forbid-duplicated-anchors"] and token.value in anchors:
                yield LintProblem(
                    line=token.start_mark.line + 1,
                    column=token.start_mark.column + 1,
                    desc=f'found duplicated anchor "{token.value}"',
                )
            anchors[token.value] = {
                "line": token.start_mark.line,
                "column": token.start_mark.column,
                "used": False,
            }
