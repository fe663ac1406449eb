"""Rule contract: identifier, option schema, defaults and a check shape."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from yamlscope.models.problems import LintProblem
from yamlscope.parser.comments import Comment
from yamlscope.parser.lines import Line
from yamlscope.parser.tokens import Token

# An option spec is a type (bool, int, str), a tuple of accepted literals
# and/or types, or a list holding the spec of each list item.
OptionSpec = type | tuple[Any, ...] | list[Any]


class RuleType(StrEnum):
    """What a rule's check operation is invoked on."""

    LINE = "line"
    TOKEN = "token"
    COMMENT = "comment"


class Rule(ABC):
    """Abstract base for all lint rules.

    Concrete rules subclass one of ``LineRule``, ``TokenRule`` or
    ``CommentRule``, which fix the ``check`` signature.
    """

    @property
    @abstractmethod
    def id(self) -> str: ...

    @property
    @abstractmethod
    def type(self) -> RuleType: ...

    @property
    def conf(self) -> dict[str, OptionSpec]:
        """Option schema: option name to accepted type or literals."""
        return {}

    @property
    def default(self) -> dict[str, Any]:
        """Default value for every option in ``conf``."""
        return {}

    def validate(self, conf: dict[str, Any]) -> str | None:
        """Cross-option validation; return an error message or None."""
        return None


class LineRule(Rule):
    @property
    def type(self) -> RuleType:
        return RuleType.LINE

    @abstractmethod
    def check(self, conf: dict[str, Any], line: Line) -> Iterator[LintProblem]:
        """Yield the problems found on one line."""


class CommentRule(Rule):
    @property
    def type(self) -> RuleType:
        return RuleType.COMMENT

    @abstractmethod
    def check(self, conf: dict[str, Any], comment: Comment) -> Iterator[LintProblem]:
        """Yield the problems found for one comment."""


class TokenRule(Rule):
    """A rule invoked on every token with a small window around it.

    ``context`` is created by ``create_context`` once per input and handed
    to every call for that input; the rule owns it exclusively.
    """

    @property
    def type(self) -> RuleType:
        return RuleType.TOKEN

    def create_context(self) -> dict[str, Any]:
        return {}

    @abstractmethod
    def check(
        self,
        conf: dict[str, Any],
        token: Token,
        prev: Token | None,
        next: Token | None,
        nextnext: Token | None,
        context: dict[str, Any],
    ) -> Iterator[LintProblem]:
        """Yield the problems found at ``token``."""
