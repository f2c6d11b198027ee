"""Async HTTP fetcher and HTML parser used by the crawl loop.

``fetch_text`` translates every httpx failure into the engine's error
taxonomy so the orchestrator can tell timeouts, network failures, HTTP
errors, undecodable bodies and empty responses apart.
"""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup
from bs4.dammit import EncodingDetector, UnicodeDammit

from novelcrawl.config import settings
from novelcrawl.scraper.errors import (
    EmptyOrInvalidResponse,
    EncodingFailure,
    FetchTimeout,
    HttpStatusFailure,
    NetworkFailure,
)

logger = logging.getLogger(__name__)

# Pages shorter than this cannot be a real HTML document.
MIN_RESPONSE_LENGTH = 100

# Chinese sites routinely declare GB2312 but serve GBK/GB18030 bytes.
_CHARSET_ALIASES = {
    "gb2312": "gb18030",
    "gbk": "gb18030",
    "x-gbk": "gb18030",
}


def _headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9,zh-TW;q=0.8,zh;q=0.7",
        "Upgrade-Insecure-Requests": "1",
    }


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _decode(content: bytes, header_charset: str | None, url: str) -> str:
    """Decode *content* using the header charset, then any ``<meta>`` charset."""
    declared = header_charset or EncodingDetector.find_declared_encoding(content, is_html=True)
    known = []
    if declared:
        known.append(_CHARSET_ALIASES.get(declared.lower(), declared))

    dammit = UnicodeDammit(content, known, is_html=True)
    if dammit.unicode_markup is None:
        raise EncodingFailure(
            f"Could not decode the page content (declared charset: {declared or 'none'}).",
            url,
        )
    if dammit.original_encoding:
        logger.debug("Decoded %s as %s", url, dammit.original_encoding)
    return dammit.unicode_markup


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def fetch_text(url: str, timeout: float | None = None) -> str:
    """Fetch *url* and return its body as text.

    A fresh ``httpx.AsyncClient`` is opened per call so the connection is
    scoped to this single request/response exchange.

    Raises:
        FetchTimeout: The request exceeded *timeout* seconds.
        HttpStatusFailure: The server returned a 4xx/5xx status code.
        NetworkFailure: DNS, connection, redirect or protocol-level failure.
        EncodingFailure: The body could not be decompressed or decoded.
        EmptyOrInvalidResponse: The body is too short to be HTML.
    """
    if timeout is None:
        timeout = settings.request_timeout

    logger.debug("GET %s (timeout=%ss)", url, timeout)
    try:
        async with httpx.AsyncClient(
            headers=_headers(),
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise FetchTimeout(
            "Request timed out. The website took too long to respond.", url
        ) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        reason = exc.response.reason_phrase
        raise HttpStatusFailure(
            f"Failed to fetch URL ({status} {reason}). "
            "The website may be blocking requests or the page may not exist.",
            url,
            status_code=status,
        ) from exc
    except httpx.DecodingError as exc:
        raise EncodingFailure(
            f"Could not decode the page content ({_describe(exc)}).", url
        ) from exc
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise NetworkFailure(
            "Network error. Please check your internet connection and ensure "
            f"the URL is accessible ({_describe(exc)}).",
            url,
        ) from exc

    html = _decode(response.content, response.charset_encoding, url)
    logger.debug("HTML received from %s. Length: %d", url, len(html))

    if len(html.strip()) < MIN_RESPONSE_LENGTH:
        raise EmptyOrInvalidResponse("The website returned empty or invalid content.", url)

    return html


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* into a queryable document."""
    return BeautifulSoup(html, "html.parser")
