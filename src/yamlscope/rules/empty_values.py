"""Forbid implicit null values in mappings and sequences.

Each option enables the check for one kind of collection:
``forbid-in-block-mappings``, ``forbid-in-flow-mappings`` and
``forbid-in-block-sequences``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry


def _is(token: Token | None, *kinds: TokenKind) -> bool:
    return token is not None and token.kind in kinds


@RuleRegistry.register
class EmptyValuesRule(TokenRule):
    @property
    def id(self) -> str:
        return "empty-values"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "forbid-in-block-mappings": bool,
            "forbid-in-flow-mappings": bool,
            "forbid-in-block-sequences": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "forbid-in-block-mappings": True,
            "forbid-in-flow-mappings": True,
            "forbid-in-block-sequences": True,
        }

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        line = token.start_mark.line + 1
        column = token.end_mark.column + 1

        if token.kind is TokenKind.VALUE:
            if conf["forbid-in-block-mappings"] and _is(
                next, TokenKind.KEY, TokenKind.BLOCK_MAPPING_END, TokenKind.BLOCK_SEQUENCE_END
            ):
                yield LintProblem(line=line, column=column, desc="empty value in block mapping")
            if conf["forbid-in-flow-mappings"] and _is(
                next, TokenKind.FLOW_ENTRY, TokenKind.FLOW_MAPPING_END
            ):
                yield LintProblem(line=line, column=column, desc="empty value in flow mapping")

        if (
            token.kind is TokenKind.BLOCK_ENTRY
            and conf["forbid-in-block-sequences"]
            and _is(
                next,
                TokenKind.KEY,
                TokenKind.BLOCK_MAPPING_END,
                TokenKind.BLOCK_SEQUENCE_END,
                TokenKind.BLOCK_ENTRY,
            )
        ):
            yield LintProblem(line=line, column=column, desc="empty value in block sequence")
