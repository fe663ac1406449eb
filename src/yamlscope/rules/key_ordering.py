"""Require mapping keys to be sorted.

Keys matching one of the ``ignored-keys`` regular expressions are left
out of the comparison.  Keys are compared with the current locale's
collation (see the ``locale`` config key).
"""

from __future__ import annotations

import locale
import re
from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.key_duplicates import Parent, track_collections
from yamlscope.rules.registry import RuleRegistry


@RuleRegistry.register
class KeyOrderingRule(TokenRule):
    @property
    def id(self) -> str:
        return "key-ordering"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"ignored-keys": [str]}

    @property
    def default(self) -> dict[str, Any]:
        return {"ignored-keys": []}

    def validate(self, conf: dict[str, Any]) -> str | None:
        for pattern in conf["ignored-keys"]:
            try:
                re.compile(pattern)
            except re.error as exc:
                return f'invalid regular expression "{pattern}" in ignored-keys: {exc}'
        return None

    def create_context(self) -> dict[str, Any]:
        return {"stack": []}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        stack: list[Parent] = context["stack"]
        track_collections(token, stack)

        if (
            token.kind is TokenKind.KEY
            and next is not None
            and next.kind is TokenKind.SCALAR
            and stack
            and stack[-1].is_mapping
            and not any(re.match(pattern, next.value) for pattern in conf["ignored-keys"])
        ):
            parent = stack[-1]
            if any(locale.strcoll(next.value, key) < 0 for key in parent.keys):
                yield LintProblem(
                    line=next.start_mark.line + 1,
                    column=next.start_mark.column + 1,
                    desc=f'wrong ordering of key "{next.value}" in mapping',
                )
            else:
                parent.keys.append(next.value)
