"""Positioned lint diagnostics."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ProblemLevel(StrEnum):
    """Severity of a lint problem."""

    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return 1 if self is ProblemLevel.WARNING else 2


class LintProblem(BaseModel):
    """A single diagnostic with 1-based line and column numbers.

    Rules yield problems with ``rule`` and ``level`` unset; the engine
    stamps both before the problem leaves the linter.

    ``desc`` holds the bare message text (e.g. ``"trailing spaces"``) and
    is the field serialized by the API.  ``message`` is the rendered form
    printed by the ``parsable`` CLI format, ``desc`` followed by the rule
    id in parentheses once a rule is set: ``"trailing spaces
    (trailing-spaces)"``.  The other formats place ``desc`` and the rule
    id themselves.
    """

    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    desc: str = "<no description>"
    rule: str | None = None
    level: ProblemLevel | None = None

    @property
    def message(self) -> str:
        if self.rule is not None:
            return f"{self.desc} ({self.rule})"
        return self.desc

    @property
    def sort_key(self) -> tuple[int, int, str]:
        return (self.line, self.column, self.rule or "")

    def __repr__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"
