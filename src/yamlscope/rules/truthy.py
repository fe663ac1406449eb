"""Forbid non-explicit truthy values such as ``yes`` or ``on``.

``allowed-values`` lists the spellings that remain accepted.  A
``%YAML 1.2`` directive narrows the checked set to the 1.2 booleans for
the rest of that document.  Tagged and quoted scalars are ignored, and so
are keys when ``check-keys`` is false.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import is_plain_scalar
from yamlscope.rules.registry import RuleRegistry

TRUTHY_1_1 = (
    "YES", "Yes", "yes",
    "NO", "No", "no",
    "TRUE", "True", "true",
    "FALSE", "False", "false",
    "ON", "On", "on",
    "OFF", "Off", "off",
)
TRUTHY_1_2 = ("TRUE", "True", "true", "FALSE", "False", "false")


@RuleRegistry.register
class TruthyRule(TokenRule):
    @property
    def id(self) -> str:
        return "truthy"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"allowed-values": [TRUTHY_1_1], "check-keys": bool}

    @property
    def default(self) -> dict[str, Any]:
        return {"allowed-values": ["true", "false"], "check-keys": True}

    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        if token.kind is TokenKind.DIRECTIVE and token.value == "YAML":
            context["yaml_spec_version"] = token.directive_args
        elif token.kind is TokenKind.DOCUMENT_END:
            context.pop("yaml_spec_version", None)
            context.pop("bad_truthy_values", None)
            return

        if prev is not None and prev.kind is TokenKind.TAG:
            return
        if not conf["check-keys"] and prev is not None and prev.kind is TokenKind.KEY:
            return
        if not is_plain_scalar(token):
            return

        if "bad_truthy_values" not in context:
            spec = TRUTHY_1_2 if context.get("yaml_spec_version") == (1, 2) else TRUTHY_1_1
            context["bad_truthy_values"] = set(spec) - set(conf["allowed-values"])

        if token.value in context["bad_truthy_values"]:
            allowed = ", ".join(sorted(conf["allowed-values"]))
            yield LintProblem(
                line=token.start_mark.line + 1,
                column=token.start_mark.column + 1,
                desc=f"truthy value should be one of [{allowed}]",
            )
