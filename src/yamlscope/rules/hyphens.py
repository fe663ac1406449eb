"""Limit the spaces after a block sequence hyphen."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import spaces_after
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class HyphensRule(TokenRule):
    @property
    def id(self) -> str:
        return "hyphens"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"max-spaces-after": int}

    @property
    def default(self) -> dict[str, Any]:
        return {"max-spaces-after": 1}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if token.kind is TokenKind.BLOCK_ENTRY:
            problem = spaces_after(
                token, prev, next,
                max=conf["max-spaces-after"],
                max_desc="too many spaces after hyphen",
            )
            if problem is not None:
                yield problem
