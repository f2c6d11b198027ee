"""Crawl orchestrator: fetch → extract → locate next page → repeat.

``scrape`` is the engine's only entry point for hosts::

    document = await scrape("https://example.com/novel/ch1", max_pages=20)

Pages are fetched strictly one after another because the URL of page N+1 is
only known once page N has been parsed.  Normalization happens per page;
script detection and conversion run once over the merged text.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Awaitable, Callable, Optional

from bs4 import BeautifulSoup

from novelcrawl.config import PAGE_CAP_CEILING, settings
from novelcrawl.scraper.chinese import is_simplified, to_traditional
from novelcrawl.scraper.errors import ExtractionFailure
from novelcrawl.scraper.extractor import extract_page
from novelcrawl.scraper.fetcher import fetch_text, parse_html
from novelcrawl.scraper.guard import same_chapter
from novelcrawl.scraper.locator import find_next_page
from novelcrawl.scraper.models import CrawlState, PageExtraction, ScrapedDocument

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], Awaitable[str]]

# Merged content shorter than this is treated as a failed extraction.
MIN_CONTENT_LENGTH = 50
# Pages shorter than this are skipped rather than appended.
MIN_PAGE_LENGTH = 50
# Accumulated content needed to survive a failing later page.
MIN_PARTIAL_LENGTH = 100

_TITLE_SUFFIX = re.compile(r"\.(?:txt|md)$", re.IGNORECASE)

_NO_CONTENT_MESSAGE = (
    "Could not extract meaningful content from the URL. The page structure may "
    "not be supported, or the content may be loaded dynamically via JavaScript."
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _page_cap(max_pages: Optional[int]) -> int:
    """Validate *max_pages* and clamp it; 0 means single-page mode."""
    if max_pages is None:
        return 0
    if isinstance(max_pages, bool) or not isinstance(max_pages, int):
        raise TypeError(f"max_pages must be an integer, got {type(max_pages).__name__}")
    if max_pages <= 0:
        return 0
    return min(max_pages, settings.max_page_cap, PAGE_CAP_CEILING)


async def _fetch_page(fetch: Fetcher, url: str) -> tuple[BeautifulSoup, PageExtraction]:
    html = await fetch(url, settings.request_timeout)
    doc = parse_html(html)
    return doc, extract_page(doc)


def _finalize(title: str, content: str) -> ScrapedDocument:
    if len(content) < MIN_CONTENT_LENGTH:
        logger.error("Content too short: %d chars", len(content))
        raise ExtractionFailure(_NO_CONTENT_MESSAGE)

    if is_simplified(content):
        logger.info("Detected Simplified Chinese, converting to Traditional")
        content = to_traditional(content)
        title = to_traditional(title)

    return ScrapedDocument(title=_TITLE_SUFFIX.sub("", title.strip()), content=content)


async def _scrape_single(url: str, fetch: Fetcher) -> ScrapedDocument:
    logger.info("Single page mode: %s", url)
    _, page = await _fetch_page(fetch, url)
    return _finalize(page.title, page.content)


async def _scrape_pages(url: str, cap: int, fetch: Fetcher, strict: bool) -> ScrapedDocument:
    logger.info("Multi-page mode: up to %d pages from %s", cap, url)
    state = CrawlState(current_url=url, page_cap=cap)

    while (
        state.current_url
        and state.current_url not in state.visited
        and state.page_count < state.page_cap
    ):
        page_url = state.current_url
        state.begin_page(page_url)
        logger.info("Scraping page %d: %s", state.page_count, page_url)

        try:
            doc, page = await _fetch_page(fetch, page_url)
        except Exception as exc:
            merged = len(state.content)
            if merged > MIN_PARTIAL_LENGTH:
                logger.warning(
                    "Page %d failed (%s); keeping %d chars gathered so far",
                    state.page_count, exc, merged,
                )
                break
            raise

        state.keep_title(page.title)

        if page.content and page.content == state.last_page_content:
            logger.info("Page %d repeats the previous page, stopping", state.page_count)
            break
        state.last_page_content = page.content

        if len(page.content) > MIN_PAGE_LENGTH:
            state.pages.append(page.content)
            logger.info("Page %d extracted (%d chars)", state.page_count, len(page.content))
        else:
            logger.info("Page %d content too short, skipping", state.page_count)

        candidate = find_next_page(
            doc, page_url, first_page=state.page_count == 1, strict=strict
        )
        if candidate is None:
            logger.info("No next page found, stopping")
            state.current_url = None
        elif not (candidate.constructed or same_chapter(url, candidate.url, strict=strict)):
            logger.info("Next page %s looks like a different chapter, stopping", candidate.url)
            state.current_url = None
        elif candidate.url in state.visited:
            logger.info("Next page %s already visited, stopping", candidate.url)
            state.current_url = None
        else:
            state.current_url = candidate.url
            if state.page_count < state.page_cap:
                await asyncio.sleep(settings.rate_limit_delay)

    if state.page_count >= state.page_cap:
        logger.info("Reached maximum page limit (%d)", state.page_cap)
    logger.info(
        "Finished: %d page(s) fetched, %d chars", state.page_count, len(state.content)
    )
    return _finalize(state.title, state.content)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def scrape(
    url: str,
    max_pages: Optional[int] = None,
    *,
    fetch: Optional[Fetcher] = None,
    strict: Optional[bool] = None,
) -> ScrapedDocument:
    """Extract a titled, cleaned document starting at *url*.

    Args:
        url: First page to fetch.
        max_pages: ``None`` or ``<= 0`` fetches a single page; larger values
            follow next-page links up to ``settings.max_page_cap`` pages.
        fetch: Awaitable ``(url, timeout) -> html``; defaults to
            :func:`~novelcrawl.scraper.fetcher.fetch_text`.  Custom fetchers
            should raise :class:`ExtractionError` subclasses on failure; any
            error on a later page ends the crawl once enough content exists.
        strict: Disable guessed next-page URLs and ambiguous chapter
            matches.  Defaults to ``settings.strict_chapter_guard``.

    Raises:
        TypeError: *max_pages* is not an integer.
        ExtractionError: A fetch failed before enough content was gathered,
            or the merged content is shorter than ``MIN_CONTENT_LENGTH``.
    """
    cap = _page_cap(max_pages)
    if fetch is None:
        fetch = fetch_text
    if strict is None:
        strict = settings.strict_chapter_guard

    if cap == 0:
        return await _scrape_single(url, fetch)
    return await _scrape_pages(url, cap, fetch, strict)
