"""Control spacing around commas in flow collections."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import spaces_after, spaces_before
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class CommasRule(TokenRule):
    @property
    def id(self) -> str:
        return "commas"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"max-spaces-before": int, "min-spaces-after": int, "max-spaces-after": int}

    @property
    def default(self) -> dict[str, Any]:
        return {"max-spaces-before": 0, "min-spaces-after": 1, "max-spaces-after": 1}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if token.kind is not TokenKind.FLOW_ENTRY:
            return

        if (
            prev is not None
            and conf["max-spaces-before"] != -1
            and prev.end_mark.line < token.start_mark.line
        ):
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=max(1, token.start_mark.column),
                desc="too many spaces before comma",
            )
        else:
            problem = spaces_before(
                token, prev, next,
                max=conf["max-spaces-before"],
                max_desc="too many spaces before comma",
            )
            if problem is not None:
                yield problem

        problem = spaces_after(
            token, prev, next,
            min=conf["min-spaces-after"],
            max=conf["max-spaces-after"],
            min_desc="too few spaces after comma",
            max_desc="too many spaces after comma",
        )
        if problem is not None:
            yield problem
