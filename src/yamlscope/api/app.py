"""FastAPI application factory for the yamlscope REST API."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from yamlscope import __version__
from yamlscope.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from yamlscope.api.routers import lint, rules
from yamlscope.api.schemas import HealthResponse
from yamlscope.settings import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="yamlscope",
        description="Lints YAML documents for syntax and cosmetic problems.",
        version=__version__,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    # Room for JSON escaping around the largest accepted document
    app.add_middleware(RequestBodyLimitMiddleware, max_bytes=settings.max_document_size * 4)

    app.include_router(lint.router, prefix="/lint", tags=["lint"])
    app.include_router(rules.router, prefix="/rules", tags=["rules"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("yamlscope.api")
    logger.info(
        "yamlscope API Server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.api_server_port,
    )

    uvicorn.run(
        "yamlscope.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.api_server_port,
        log_level=settings.log_level.lower(),
    )
