"""Require or forbid the ``...`` document end marker."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class DocumentEndRule(TokenRule):
    @property
    def id(self) -> str:
        return "document-end"

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
        if not conf["present"]:
            if token.kind is TokenKind.DOCUMENT_END:
                yield LintProblem(
                    line=token.start_mark.line + 1,
                    column=token.start_mark.column + 1,
                    desc='found forbidden document end "..."',
                )
            return

        prev_closes = prev is not None and prev.kind in (
            TokenKind.DOCUMENT_END, TokenKind.STREAM_START
        )
        if token.kind is TokenKind.STREAM_END and not prev_closes:
            # Stream end sits on the line after the last one when the
            # file ends with a line break.
            line = token.start_mark.line
            if token.start_mark.column > 0 or line == 0:
                line += 1
            yield LintProblem(line=line, column=1, desc='missing document end "..."')
        elif (
            token.kind is TokenKind.DOCUMENT_START
            and not prev_closes
            and not (prev is not None and prev.kind is TokenKind.DIRECTIVE)
        ):
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=1,
                desc='missing document end "..."',
            )
