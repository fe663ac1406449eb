"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level configuration for the linter, CLI and REST API.

    Values are read from ``YAMLSCOPE_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="YAMLSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Decoder
    file_encoding: str | None = None  # forces a codec, bypassing detection

    # Config discovery
    config_file: str | None = None  # user-global config path override

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    max_document_size: int = 5_000_000  # characters accepted by POST /lint
