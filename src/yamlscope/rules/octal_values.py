"""Forbid octal-looking plain scalars.

``010`` is an octal integer in YAML 1.1 but a decimal in YAML 1.2, and
``0o10`` is octal only in 1.2; both are ambiguous enough to flag.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import is_plain_scalar
from yamlscope.rules.registry import RuleRegistry

IMPLICIT_OCTAL_RE = re.compile(r"^0[0-7]+$")
EXPLICIT_OCTAL_RE = re.compile(r"^0o[0-7]+$")


@RuleRegistry.register
class OctalValuesRule(TokenRule):
    @property
    def id(self) -> str:
        return "octal-values"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"forbid-implicit-octal": bool, "forbid-explicit-octal": bool}

    @property
    def default(self) -> dict[str, Any]:
        return {"forbid-implicit-octal": True, "forbid-explicit-octal": True}

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
        column = token.end_mark.column + 1
        if conf["forbid-implicit-octal"] and IMPLICIT_OCTAL_RE.match(value):
            yield LintProblem(
                line=line, column=column, desc=f'forbidden implicit octal value "{value}"'
            )
        if conf["forbid-explicit-octal"] and EXPLICIT_OCTAL_RE.match(value):
            yield LintProblem(
                line=line, column=column, desc=f'forbidden explicit octal value "{value}"'
            )
