"""Tests for the document size limits of the REST API."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from yamlscope.api.app import create_app
from yamlscope.settings import Settings


@pytest.fixture
def app():
    return create_app(settings=Settings(max_document_size=10))


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestDocumentSizeLimit:
    async def test_within_limit(self, client: AsyncClient) -> None:
        response = await client.post("/lint", json={"content": "---\na: 1\n"})
        assert response.status_code == 200

    async def test_content_over_limit(self, client: AsyncClient) -> None:
        response = await client.post("/lint", json={"content": "x" * 11})
        assert response.status_code == 413
        assert "exceeds maximum size" in response.json()["detail"]


class TestRequestBodyLimit:
    async def test_body_over_limit(self, client: AsyncClient) -> None:
        response = await client.post("/lint", json={"content": "x" * 100})
        assert response.status_code == 413
        assert "too large" in response.json()["detail"]

    async def test_chunked_body_over_limit(self, client: AsyncClient) -> None:
        async def chunks():
            yield b'{"content": "'
            yield b"x" * 100
            yield b'"}'

        response = await client.post(
            "/lint", content=chunks(), headers={"content-type": "application/json"}
        )
        assert response.status_code == 413

    async def test_malformed_content_length(self, client: AsyncClient) -> None:
        response = await client.post(
            "/health",
            content=b"small body",
            headers={"content-length": "not-a-number"},
        )
        assert response.status_code != 500
