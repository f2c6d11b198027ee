"""Data models for the crawl pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

PAGE_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class ScrapedDocument:
    """The engine's final output: a title and the merged, cleaned text."""

    title: str
    content: str


@dataclass
class PageExtraction:
    """Title and normalized main text of a single fetched page."""

    title: str
    content: str


@dataclass(frozen=True)
class NextPageCandidate:
    """A next-page URL plus whether it was guessed rather than linked."""

    url: str
    constructed: bool = False


@dataclass
class CrawlState:
    """Mutable accumulator owned by one :func:`scrape` call."""

    current_url: Optional[str]
    page_cap: int
    title: str = ""
    page_count: int = 0
    visited: Set[str] = field(default_factory=set)
    pages: List[str] = field(default_factory=list)
    last_page_content: str = ""

    @property
    def content(self) -> str:
        """Merged page texts in crawl order."""
        return PAGE_SEPARATOR.join(self.pages)

    def begin_page(self, url: str) -> None:
        self.page_count += 1
        self.visited.add(url)

    def keep_title(self, title: str) -> None:
        """Record *title* unless an earlier page already provided one."""
        if not self.title and title:
            self.title = title
