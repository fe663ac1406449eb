"""Shared test fixtures for yamlscope."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from yamlscope.config import YamlLintConfig
from yamlscope.linter import run
from yamlscope.models.problems import LintProblem

Positions = list[tuple[int, int]]


@pytest.fixture
def default_config() -> YamlLintConfig:
    return YamlLintConfig(content="extends: default")


@pytest.fixture
def lint() -> Callable[..., list[LintProblem]]:
    """Lint a source with a config given as YAML text."""

    def _lint(source: str | bytes, conf: str, filepath: str | None = None) -> list[LintProblem]:
        return run(source, YamlLintConfig(content=conf), filepath)

    return _lint


@pytest.fixture
def check(lint: Callable[..., list[LintProblem]]) -> Callable[[str, str], Positions]:
    """Return the ``(line, column)`` of each problem found in a source."""

    def _check(source: str, conf: str) -> Positions:
        return [(p.line, p.column) for p in lint(source, conf)]

    return _check


SAMPLE_DOCUMENT = """\
---
# Service definition
service:
  name: api
  replicas: 3
  ports: [80, 443]
  labels: {tier: backend, team: core}
  env:
    - name: MODE  # inline note
      value: "production"
    - name: BANNER
      value: |
        multi
        line
...
"""


@pytest.fixture
def sample_document() -> str:
    """A clean document under the default configuration."""
    return SAMPLE_DOCUMENT
