"""Lint endpoint: POST /lint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from yamlscope.api.deps import get_default_config, get_settings
from yamlscope.api.schemas import LintRequest, LintResponse
from yamlscope.config import YamlLintConfig, YamlLintConfigError
from yamlscope.linter import RuleExecutionError, run
from yamlscope.models.problems import ProblemLevel
from yamlscope.settings import Settings

logger = logging.getLogger("yamlscope.api")

router = APIRouter()


@router.post("", response_model=LintResponse)
async def lint(body: LintRequest, settings: Settings = Depends(get_settings)) -> LintResponse:
    """Lint YAML content, optionally with a custom configuration."""
    if len(body.content) > settings.max_document_size:
        raise HTTPException(
            status_code=413,
            detail=(
                f"YAML document exceeds maximum size "
                f"({len(body.content):,} chars > {settings.max_document_size:,} limit)"
            ),
        )

    if body.config is None:
        conf = get_default_config()
    else:
        try:
            conf = YamlLintConfig(content=body.config)
        except YamlLintConfigError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from None

    try:
        problems = run(body.content, conf, filepath=body.filepath)
    except RuleExecutionError as exc:
        logger.exception("Lint run aborted by rule %s", exc.rule_id)
        raise HTTPException(status_code=500, detail=f'rule "{exc.rule_id}" failed') from None

    errors = sum(1 for p in problems if p.level is ProblemLevel.ERROR)
    warnings = sum(1 for p in problems if p.level is ProblemLevel.WARNING)
    return LintResponse(
        valid=errors == 0,
        problems=problems,
        error_count=errors,
        warning_count=warnings,
    )
