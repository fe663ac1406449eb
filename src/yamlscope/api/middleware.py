"""Middleware: request timing and body size limits."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add X-Request-Duration header with processing time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``max_bytes``.

    The Content-Length header is checked first; bodies without one are
    counted while streaming and the consumed bytes are cached on
    ``request._body`` so handlers can still read them.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes

    def _too_large(self) -> JSONResponse:
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large (max {self.max_bytes:,} bytes)"},
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length", "")
        # A malformed header is left to the streaming count below
        if content_length.isdigit() and int(content_length) > self.max_bytes:
            return self._too_large()

        if request.method in ("POST", "PUT", "PATCH"):
            chunks: list[bytes] = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > self.max_bytes:
                    return self._too_large()
                chunks.append(chunk)
            request._body = b"".join(chunks)  # noqa: SLF001

        return await call_next(request)
