"""Pydantic models shared by the linter, CLI and REST API."""

from yamlscope.models.problems import LintProblem, ProblemLevel

__all__ = ["LintProblem", "ProblemLevel"]
