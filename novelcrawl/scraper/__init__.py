"""Scraper package — fetch, extract, paginate and normalize novel text."""

from novelcrawl.scraper.crawler import scrape
from novelcrawl.scraper.errors import (
    EmptyOrInvalidResponse,
    EncodingFailure,
    ExtractionError,
    ExtractionFailure,
    FetchError,
    FetchTimeout,
    HttpStatusFailure,
    NetworkFailure,
)
from novelcrawl.scraper.models import PAGE_SEPARATOR, ScrapedDocument

__all__ = [
    "scrape",
    "ScrapedDocument",
    "PAGE_SEPARATOR",
    "ExtractionError",
    "ExtractionFailure",
    "FetchError",
    "FetchTimeout",
    "NetworkFailure",
    "HttpStatusFailure",
    "EncodingFailure",
    "EmptyOrInvalidResponse",
]
