"""Dependency injection for FastAPI: settings and the default lint config."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from yamlscope.config import YamlLintConfig
from yamlscope.settings import Settings


def get_settings(request: Request) -> Settings:
    """FastAPI ``Depends`` provider for the application settings."""
    settings: Settings = request.app.state.settings
    return settings


@lru_cache(maxsize=1)
def get_default_config() -> YamlLintConfig:
    """The built-in ``default`` configuration, loaded once."""
    return YamlLintConfig.builtin("default")
