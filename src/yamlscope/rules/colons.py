"""Control spacing around mapping colons and explicit-key question marks."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import is_explicit_key, spaces_after, spaces_before
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class ColonsRule(TokenRule):
    @property
    def id(self) -> str:
        return "colons"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"max-spaces-before": int, "max-spaces-after": int}

    @property
    def default(self) -> dict[str, Any]:
        return {"max-spaces-before": 0, "max-spaces-after": 1}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        # "*alias :" needs the space, it is not counted
        after_alias = (
            prev is not None
            and prev.kind is TokenKind.ALIAS
            and token.start_mark.offset - prev.end_mark.offset == 1
        )
        if token.kind is TokenKind.VALUE and not after_alias:
            problem = spaces_before(
                token, prev, next,
                max=conf["max-spaces-before"],
                max_desc="too many spaces before colon",
            )
            if problem is not None:
                yield problem

            problem = spaces_after(
                token, prev, next,
                max=conf["max-spaces-after"],
                max_desc="too many spaces after colon",
            )
            if problem is not None:
                yield problem

        if token.kind is TokenKind.KEY and is_explicit_key(token):
            problem = spaces_after(
                token, prev, next,
                max=conf["max-spaces-after"],
                max_desc="too many spaces after question mark",
            )
            if problem is not None:
                yield problem
