"""Content extraction: turns a parsed page into a :class:`PageExtraction`.

Content is chosen by an ordered list of strategies, each a plain function
from document to optional text.  The first one producing more than
``MIN_CANDIDATE_LENGTH`` characters wins; otherwise the whole body is used
regardless of length and the orchestrator decides whether that is enough.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from novelcrawl.scraper.models import PageExtraction
from novelcrawl.scraper.normalizer import normalize

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Novel"
MIN_CANDIDATE_LENGTH = 100

NOISE_SELECTOR = (
    "script, style, noscript, nav, header, footer, aside, "
    ".ad, .ads, .advertisement"
)

CONTENT_SELECTORS = (
    "#content",
    ".content",
    "#chapter-content",
    ".chapter-content",
    "#novel-content",
    ".novel-content",
    "article",
    "main",
    ".post-content",
    "#post-content",
)

# Elements whose boundaries become paragraph breaks in the rendered text.
_BLOCK_TAGS = frozenset({
    "address", "article", "blockquote", "dd", "div", "dl", "dt", "figcaption",
    "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "li", "main", "ol",
    "p", "pre", "section", "table", "tr", "ul",
})
_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

ContentStrategy = Callable[[BeautifulSoup], Optional[str]]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

# Pushed after a block element's children; emits its closing break.
_BLOCK_END = object()


def _render(node: Tag, parts: List[str]) -> None:
    # Explicit stack: tag-soup pages nest far deeper than the recursion limit.
    pending: list = list(reversed(node.contents))
    while pending:
        child = pending.pop()
        if child is _BLOCK_END:
            parts.append("\n\n")
        elif isinstance(child, NavigableString):
            if not isinstance(child, _SKIPPED_STRINGS):
                parts.append(str(child))
        elif isinstance(child, Tag):
            if child.name == "br":
                parts.append("\n")
                continue
            if child.name in _BLOCK_TAGS:
                parts.append("\n\n")
                pending.append(_BLOCK_END)
            pending.extend(reversed(child.contents))


def render_text(element: Tag) -> str:
    """Return the text of *element* with ``<br>`` and block boundaries as line breaks."""
    parts: List[str] = []
    _render(element, parts)
    return "".join(parts)


def _inline_text(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _extract_title(doc: BeautifulSoup) -> str:
    """First non-empty of ``<h1>``, ``<title>``, ``og:title``, else the default."""
    title = _inline_text(doc.find("h1")) or _inline_text(doc.find("title"))
    if title:
        return title

    og = doc.find("meta", attrs={"property": "og:title"})
    if og is not None:
        og_title = " ".join(str(og.get("content") or "").split())
        if og_title:
            return og_title

    return DEFAULT_TITLE


def _selector_strategy(selector: str) -> ContentStrategy:
    def strategy(doc: BeautifulSoup) -> Optional[str]:
        element = doc.select_one(selector)
        if element is None:
            return None
        return normalize(render_text(element))

    strategy.__name__ = f"select({selector})"
    return strategy


CONTENT_STRATEGIES: tuple[ContentStrategy, ...] = tuple(
    _selector_strategy(selector) for selector in CONTENT_SELECTORS
)


def strip_noise(doc: BeautifulSoup) -> BeautifulSoup:
    """Return a copy of *doc* without scripts, navigation and ad elements."""
    work = copy.copy(doc)
    for element in work.select(NOISE_SELECTOR):
        element.decompose()
    return work


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_page(doc: BeautifulSoup) -> PageExtraction:
    """Extract the title and normalized main text of *doc*.

    *doc* itself is left untouched so the caller can still look for
    pagination links inside the navigation elements stripped here.
    """
    work = strip_noise(doc)
    title = _extract_title(work)

    for strategy in CONTENT_STRATEGIES:
        text = strategy(work)
        if text and len(text) > MIN_CANDIDATE_LENGTH:
            logger.debug("Content found via %s (%d chars)", strategy.__name__, len(text))
            return PageExtraction(title=title, content=text)

    root = work.body or work
    content = normalize(render_text(root))
    logger.debug("No content container matched; using body text (%d chars)", len(content))
    return PageExtraction(title=title, content=content)
