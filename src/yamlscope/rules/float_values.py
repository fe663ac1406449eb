"""Restrict the accepted spellings of floating-point numbers."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import is_plain_scalar
from yamlscope.rules.registry import RuleRegistry

IS_NUMERAL_BEFORE_DECIMAL_PATTERN = re.compile(r"[-+]?(\.[0-9]+)([eE][-+]?[0-9]+)?$")
IS_SCIENTIFIC_NOTATION_PATTERN = re.compile(
    r"[-+]?(\.[0-9]+|[0-9]+(\.[0-9]*)?)([eE][-+]?[0-9]+)$"
)
IS_INF_PATTERN = re.compile(r"[-+]?(\.inf|\.Inf|\.INF)$")
IS_NAN_PATTERN = re.compile(r"(\.nan|\.NaN|\.NAN)$")


@RuleRegistry.register
class FloatValuesRule(TokenRule):
    @property
    def id(self) -> str:
        return "float-values"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "require-numeral-before-decimal": bool,
            "forbid-scientific-notation": bool,
            "forbid-nan": bool,
            "forbid-inf": bool,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "require-numeral-before-decimal": False,
            "forbid-scientific-notation": False,
            "forbid-nan": False,
            "forbid-inf": False,
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
        if prev is not None and prev.kind is TokenKind.TAG:
            return
        if not is_plain_scalar(token):
            return

        value = token.value
        line = token.start_mark.line + 1
        column = token.start_mark.column + 1

        if conf["forbid-nan"] and IS_NAN_PATTERN.match(value):
            yield LintProblem(line=line, column=column, desc=f'forbidden not a number value "{value}"')
        if conf["forbid-inf"] and IS_INF_PATTERN.match(value):
            yield LintProblem(line=line, column=column, desc=f'forbidden infinite value "{value}"')
        if conf["forbid-scientific-notation"] and IS_SCIENTIFIC_NOTATION_PATTERN.match(value):
            yield LintProblem(
                line=line, column=column, desc=f'forbidden scientific notation "{value}"'
            )
        if conf["require-numeral-before-decimal"] and IS_NUMERAL_BEFORE_DECIMAL_PATTERN.match(value):
            yield LintProblem(
                line=line, column=column, desc=f'forbidden decimal missing 0 prefix "{value}"'
            )
