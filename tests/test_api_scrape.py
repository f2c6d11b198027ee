"""Tests for the scrape API router.

The engine's ``scrape`` coroutine is replaced with an ``AsyncMock`` so no
network access happens; the tests cover request validation, the response
shape and the mapping from engine errors to HTTP status codes.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from novelcrawl.api.app import create_app
from novelcrawl.scraper import (
    EncodingFailure,
    ExtractionFailure,
    FetchTimeout,
    HttpStatusFailure,
    NetworkFailure,
    ScrapedDocument,
)

_URL = "https://example.com/novel/ch1"


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(create_app()) as c:
        yield c


class TestScrapeEndpoint:
    def test_returns_document(self, client: TestClient) -> None:
        document = ScrapedDocument(title="Chapter One", content="Hello\n\nWorld")
        with patch("novelcrawl.api.routers.scrape.scrape", AsyncMock(return_value=document)) as mock:
            resp = client.post("/scrape", json={"url": _URL})

        assert resp.status_code == 200
        assert resp.json() == {"title": "Chapter One", "content": "Hello\n\nWorld", "length": 12}
        mock.assert_awaited_once_with(_URL, None, strict=None)

    def test_passes_page_count_and_strict(self, client: TestClient) -> None:
        document = ScrapedDocument(title="T", content="x" * 60)
        with patch("novelcrawl.api.routers.scrape.scrape", AsyncMock(return_value=document)) as mock:
            resp = client.post("/scrape", json={"url": _URL, "page_count": 20, "strict": True})

        assert resp.status_code == 200
        mock.assert_awaited_once_with(_URL, 20, strict=True)

    def test_invalid_url_rejected(self, client: TestClient) -> None:
        resp = client.post("/scrape", json={"url": "not a url"})
        assert resp.status_code == 422

    def test_non_integer_page_count_rejected(self, client: TestClient) -> None:
        resp = client.post("/scrape", json={"url": _URL, "page_count": "many"})
        assert resp.status_code == 422

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (FetchTimeout("Request timed out. The website took too long to respond."), 504),
            (NetworkFailure("Network error."), 502),
            (HttpStatusFailure("Failed to fetch URL (403 Forbidden).", status_code=403), 502),
            (EncodingFailure("Could not decode the page content (incorrect header check)."), 502),
            (ExtractionFailure("Could not extract meaningful content from the URL."), 422),
        ],
    )
    def test_engine_errors_mapped(self, client: TestClient, error, status: int) -> None:
        with patch("novelcrawl.api.routers.scrape.scrape", AsyncMock(side_effect=error)):
            resp = client.post("/scrape", json={"url": _URL})

        assert resp.status_code == status
        assert resp.json()["detail"] == str(error)
