"""Forbid duplicated keys in a mapping.

The ``<<`` merge key may repeat unless ``forbid-duplicated-merge-keys``
is set.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.registry import RuleRegistry

_MAPPING_STARTS = (TokenKind.BLOCK_MAPPING_START, TokenKind.FLOW_MAPPING_START)
_SEQUENCE_STARTS = (TokenKind.BLOCK_SEQUENCE_START, TokenKind.FLOW_SEQUENCE_START)
_COLLECTION_ENDS = (
    TokenKind.BLOCK_MAPPING_END,
    TokenKind.BLOCK_SEQUENCE_END,
    TokenKind.FLOW_MAPPING_END,
    TokenKind.FLOW_SEQUENCE_END,
)


@dataclass
class Parent:
    """An open collection and the keys seen in it so far."""

    is_mapping: bool
    keys: list[str] = field(default_factory=list)


def track_collections(token: Token, stack: list[Parent]) -> None:
    """Push or pop the collection stack for start and end tokens."""
    if token.kind in _MAPPING_STARTS:
        stack.append(Parent(is_mapping=True))
    elif token.kind in _SEQUENCE_STARTS:
        stack.append(Parent(is_mapping=False))
    elif token.kind in _COLLECTION_ENDS and stack:
        stack.pop()


@RuleRegistry.register
class KeyDuplicatesRule(TokenRule):
    @property
    def id(self) -> str:
        return "key-duplicates"

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {"forbid-duplicated-merge-keys": bool}

    @property
    def default(self) -> dict[str, Any]:
        return {"forbid-duplicated-merge-keys": False}

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

        # Keys can also appear inside flow sequences: [a: 1, b: 2]
        if (
            token.kind is TokenKind.KEY
            and next is not None
            and next.kind is TokenKind.SCALAR
            and stack
            and stack[-1].is_mapping
        ):
            parent = stack[-1]
            if next.value in parent.keys and (
                next.value != "<<" or conf["forbid-duplicated-merge-keys"]
            ):
                yield LintProblem(
                    line=next.start_mark.line + 1,
                    column=next.start_mark.column + 1,
                    desc=f'duplication of key "{next.value}" in mapping',
                )
            else:
                parent.keys.append(next.value)
