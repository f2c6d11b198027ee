"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://...", "page_count": 20}    → scrape
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, HttpUrl

from novelcrawl.scraper import (
    ExtractionError,
    FetchError,
    FetchTimeout,
    scrape,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeRequest(BaseModel):
    url: HttpUrl
    page_count: Optional[int] = None
    strict: Optional[bool] = None


class ScrapeResponse(BaseModel):
    title: str
    content: str
    length: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status_for(exc: ExtractionError) -> int:
    if isinstance(exc, FetchTimeout):
        return 504
    if isinstance(exc, FetchError):
        return 502
    return 422


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("", response_model=ScrapeResponse)
async def scrape_endpoint(body: ScrapeRequest) -> dict[str, Any]:
    """Extract a titled document from ``url``, following up to ``page_count`` pages."""
    url = str(body.url)
    try:
        document = await scrape(url, body.page_count, strict=body.strict)
    except ExtractionError as exc:
        logger.warning("Scrape of %s failed: %s", url, exc)
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc

    return {
        "title": document.title,
        "content": document.content,
        "length": len(document.content),
    }
