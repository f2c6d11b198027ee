"""Next-page discovery.

Three steps, first hit wins:

1. **Anchor search**: "next page" link text, then ``rel``/id/class naming
   conventions, then the last link of a known pagination container.
2. **Numeric pagination**: read the page number from the current URL and
   look for a link to page ``n + 1``.
3. **URL construction**: guess the next URL by incrementing that number
   (or adding ``page=2`` on the first page).  Lenient mode only; results
   are flagged ``constructed`` so the orchestrator knows they were guessed.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional
from urllib.parse import parse_qsl, urldefrag, urlencode, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from novelcrawl.scraper.models import NextPageCandidate

logger = logging.getLogger(__name__)

NEXT_PAGE_TEXTS = frozenset({
    "next",
    "next page",
    "下一页",
    "下一頁",
    "下页",
    "下頁",
})
# Decorations commonly wrapped around "next" link labels.
_LABEL_DECORATIONS = " \t\r\n\xa0　<>»›→▶〉》[]()"

NEXT_PAGE_SELECTORS = (
    'a[rel~="next"]',
    'link[rel~="next"]',
    ".next",
    "#next",
    ".next-page",
    "#next-page",
    ".nextPage",
    "#nextPage",
    'a[class*="next"]',
    'a[id*="next"]',
)

PAGINATION_CONTAINERS = (
    ".pagination",
    ".page-nav",
    ".pager",
    ".chapter-nav",
)

_PAGE_NUMBER_PATTERNS = (
    re.compile(r"[?&]chapterNumber[=_](\d+)", re.IGNORECASE),
    re.compile(r"[?&]page[=_](\d+)", re.IGNORECASE),
    re.compile(r"/page[/_-](\d+)", re.IGNORECASE),
    re.compile(r"[_-](\d+)\.html?$", re.IGNORECASE),
    re.compile(r"/(\d+)\.html?$", re.IGNORECASE),
    re.compile(r"/p(\d+)", re.IGNORECASE),
)

_PATH_PAGE_SEGMENT = re.compile(r"/page[/_-]\d+", re.IGNORECASE)
_SUFFIXED_FILE = re.compile(r"([_-])\d+(\.html?)$", re.IGNORECASE)
_NUMBERED_FILE = re.compile(r"(/)\d+(\.html?)$", re.IGNORECASE)
_P_SEGMENT = re.compile(r"/p\d+(?=/|$)", re.IGNORECASE)

_QUERY_PAGE_KEYS = ("chapterNumber", "page")


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------

def resolve_href(href: str, current_url: str) -> Optional[str]:
    """Resolve *href* against *current_url*; ``None`` for unusable links."""
    href = href.strip()
    if not href or href.startswith("#"):
        return None
    if href.lower().startswith(("javascript:", "mailto:", "tel:")):
        return None
    try:
        absolute, _ = urldefrag(urljoin(current_url, href))
        scheme = urlsplit(absolute).scheme
    except ValueError:
        return None
    if scheme not in ("http", "https"):
        return None
    if absolute == urldefrag(current_url)[0]:
        return None
    return absolute


def extract_page_number(url: str) -> Optional[int]:
    """Return the page number encoded in *url*, if any.

    Patterns, in order: ``chapterNumber=<n>``, ``page=<n>``, ``/page/<n>``,
    ``_<n>.html``, ``<n>.html``, ``/p<n>``.
    """
    url = urldefrag(url)[0]
    for pattern in _PAGE_NUMBER_PATTERNS:
        match = pattern.search(url)
        if match:
            return int(match.group(1))
    return None


def _with_query_value(parts, query, key: str, value: int) -> str:
    updated = [(k, str(value) if k == key else v) for k, v in query]
    return urlunsplit(parts._replace(query=urlencode(updated)))


def construct_next_page_url(url: str, current_page: int, next_page: int) -> Optional[str]:
    """Build the URL of *next_page* by rewriting the pagination pattern in *url*.

    Falls back to appending ``page=<next_page>`` only when *current_page* is
    1, i.e. the URL carries no pagination pattern yet.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None

    query = parse_qsl(parts.query, keep_blank_values=True)
    keys = {k for k, _ in query}
    for key in _QUERY_PAGE_KEYS:
        if key in keys:
            return _with_query_value(parts, query, key, next_page)

    path = parts.path
    if _PATH_PAGE_SEGMENT.search(path):
        path = _PATH_PAGE_SEGMENT.sub(f"/page/{next_page}", path, count=1)
    elif _SUFFIXED_FILE.search(path):
        path = _SUFFIXED_FILE.sub(rf"\g<1>{next_page}\g<2>", path)
    elif _NUMBERED_FILE.search(path):
        path = _NUMBERED_FILE.sub(rf"\g<1>{next_page}\g<2>", path)
    elif _P_SEGMENT.search(path):
        path = _P_SEGMENT.sub(f"/p{next_page}", path, count=1)
    elif current_page == 1:
        query.append(("page", str(next_page)))
        return urlunsplit(parts._replace(query=urlencode(query)))
    else:
        return None

    return urlunsplit(parts._replace(path=path))


# ---------------------------------------------------------------------------
# Anchor search
# ---------------------------------------------------------------------------

def _href_of(element: Tag) -> Optional[str]:
    if element.name in ("a", "link") and element.get("href"):
        return element["href"]
    anchor = element.find("a", href=True)
    return anchor["href"] if anchor is not None else None


def _anchors_by_text(doc: BeautifulSoup) -> Iterator[str]:
    for anchor in doc.find_all("a", href=True):
        label = " ".join(anchor.get_text(" ").split()).strip(_LABEL_DECORATIONS).lower()
        if label in NEXT_PAGE_TEXTS:
            yield anchor["href"]


def _anchors_by_convention(doc: BeautifulSoup) -> Iterator[str]:
    for selector in NEXT_PAGE_SELECTORS:
        for element in doc.select(selector):
            href = _href_of(element)
            if href:
                yield href


def _anchors_in_pagination(doc: BeautifulSoup) -> Iterator[str]:
    for selector in PAGINATION_CONTAINERS:
        for container in doc.select(selector):
            anchors = container.find_all("a", href=True)
            if anchors:
                yield anchors[-1]["href"]


def _find_linked_next(doc: BeautifulSoup, current_url: str) -> Optional[str]:
    for source in (_anchors_by_text, _anchors_by_convention, _anchors_in_pagination):
        for href in source(doc):
            url = resolve_href(href, current_url)
            if url:
                logger.debug("Next page link via %s: %s", source.__name__, url)
                return url
    return None


def _find_numbered_next(doc: BeautifulSoup, current_url: str, number: int) -> Optional[str]:
    wanted = number + 1
    for anchor in doc.find_all("a", href=True):
        url = resolve_href(anchor["href"], current_url)
        if url and extract_page_number(url) == wanted:
            logger.debug("Next page link by page number %d: %s", wanted, url)
            return url
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_next_page(
    doc: BeautifulSoup,
    current_url: str,
    *,
    first_page: bool = False,
    strict: bool = False,
) -> Optional[NextPageCandidate]:
    """Locate the URL of the page following *current_url*.

    Returns ``None`` when no link is found and (in strict mode, or when
    nothing can be guessed) no URL can be constructed.
    """
    linked = _find_linked_next(doc, current_url)
    if linked:
        return NextPageCandidate(url=linked)

    number = extract_page_number(current_url)
    if number is not None:
        numbered = _find_numbered_next(doc, current_url, number)
        if numbered:
            return NextPageCandidate(url=numbered)

    if strict:
        return None

    if number is not None:
        guessed = construct_next_page_url(current_url, number, number + 1)
    elif first_page:
        guessed = construct_next_page_url(current_url, 1, 2)
    else:
        guessed = None

    if guessed and guessed != current_url:
        logger.debug("Constructed next page URL: %s", guessed)
        return NextPageCandidate(url=guessed, constructed=True)
    return None
