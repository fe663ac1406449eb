"""Control the use of flow mappings and spacing inside ``{ }``.

Options:

* ``forbid``: ``true`` forbids flow mappings, ``non-empty`` forbids all
  but ``{}``
* ``min-spaces-inside`` / ``max-spaces-inside``: spaces after ``{`` and
  before ``}``
* ``min-spaces-inside-empty`` / ``max-spaces-inside-empty``: the same
  for empty mappings, ``-1`` to reuse the non-empty values

``FlowCollectionRule`` also backs the ``brackets`` rule.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.tokens import Token, TokenKind
from yamlscope.rules.base import OptionSpec, TokenRule
from yamlscope.rules.common import spaces_after, spaces_before
from yamlscope.rules.registry import RuleRegistry


class FlowCollectionRule(TokenRule):
    """Spacing and usage checks for one kind of flow collection."""

    start_kind: TokenKind
    end_kind: TokenKind
    collection: str
    indicators: str

    @property
    def conf(self) -> dict[str, OptionSpec]:
        return {
            "forbid": (bool, "non-empty"),
            "min-spaces-inside": int,
            "max-spaces-inside": int,
            "min-spaces-inside-empty": int,
            "max-spaces-inside-empty": int,
        }

    @property
    def default(self) -> dict[str, Any]:
        return {
            "forbid": False,
            "min-spaces-inside": 0,
            "max-spaces-inside": 0,
            "min-spaces-inside-empty": -1,
            "max-spaces-inside-empty": -1,
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
        is_start = token.kind is self.start_kind
        is_empty = is_start and next is not None and next.kind is self.end_kind
        problem: LintProblem | None = None

        if is_start and (conf["forbid"] is True or (conf["forbid"] == "non-empty" and not is_empty)):
            problem = LintProblem(
                line=token.start_mark.line + 1,
                column=token.end_mark.column + 1,
                desc=f"forbidden {self.collection}",
            )
        elif is_empty:
            min_empty = conf["min-spaces-inside-empty"]
            max_empty = conf["max-spaces-inside-empty"]
            problem = spaces_after(
                token, prev, next,
                min=min_empty if min_empty != -1 else conf["min-spaces-inside"],
                max=max_empty if max_empty != -1 else conf["max-spaces-inside"],
                min_desc=f"too few spaces inside empty {self.indicators}",
                max_desc=f"too many spaces inside empty {self.indicators}",
            )
        elif is_start:
            problem = spaces_after(
                token, prev, next,
                min=conf["min-spaces-inside"],
                max=conf["max-spaces-inside"],
                min_desc=f"too few spaces inside {self.indicators}",
                max_desc=f"too many spaces inside {self.indicators}",
            )
        elif token.kind is self.end_kind and (prev is None or prev.kind is not self.start_kind):
            problem = spaces_before(
                token, prev, next,
                min=conf["min-spaces-inside"],
                max=conf["max-spaces-inside"],
                min_desc=f"too few spaces inside {self.indicators}",
                max_desc=f"too many spaces inside {self.indicators}",
            )

        if problem is not None:
            yield problem


@RuleRegistry.register
class BracesRule(FlowCollectionRule):
    start_kind = TokenKind.FLOW_MAPPING_START
    end_kind = TokenKind.FLOW_MAPPING_END
    collection = "flow mapping"
    indicators = "braces"

    @property
    def id(self) -> str:
        return "braces"
