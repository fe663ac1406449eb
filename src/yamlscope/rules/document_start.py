"""Require or forbid the ``---`` document start marker."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry

_DOCUMENT_BOUNDARIES = (TokenKind.STREAM_START, TokenKind.DOCUMENT_END, TokenKind.DIRECTIVE)
_ALLOWED_AFTER_BOUNDARY = (TokenKind.DOCUMENT_START, TokenKind.DIRECTIVE, TokenKind.STREAM_END)


@RuleRegistry.register
class DocumentStartRule(TokenRule):
    @property
    def id(self) -> str:
        return "document-start"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"present": bool}

    @property
    def default(self) -> dict[str, Any]:
        return {"present": True}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if conf["present"]:
            if (
                prev is not None
                and prev.kind in _DOCUMENT_BOUNDARIES
                and token.kind not in _ALLOWED_AFTER_BOUNDARY
            ):
                yield LintProblem(
                    line=token.start_mark.line + 1,
                    column=1,
                    desc='missing document start "---"',
                )
        elif token.kind is TokenKind.DOCUMENT_START:
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column + 1,
                desc='found forbidden document start "---"',
            )
