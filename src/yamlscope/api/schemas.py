"""API request/response Pydantic schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from yamlscope.models.problems import LintProblem


class LintRequest(BaseModel):
    """Request body for POST /lint."""

    content: str = Field(description="YAML document(s) to lint")
    config: str | None = Field(
        default=None, description="Lint configuration as YAML; the default config when omitted"
    )
    filepath: str | None = Field(
        default=None, description="Path the content came from, used for ignore patterns"
    )


class LintResponse(BaseModel):
    """Response body for POST /lint."""

    valid: bool
    problems: list[LintProblem] = []
    error_count: int = 0
    warning_count: int = 0


class RuleInfo(BaseModel):
    """A registered rule with its option defaults."""

    id: str
    type: str
    options: dict[str, Any] = {}


class RuleListResponse(BaseModel):
    """Response for GET /rules."""

    rules: list[RuleInfo] = []


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
