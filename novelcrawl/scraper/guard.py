"""Chapter-boundary check for candidate next-page URLs.

Pagination heuristics regularly land on "next chapter" or "related work"
links.  :func:`same_chapter` rejects candidates that look like a different
chapter.  It never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

_CHAPTER_NUMBER = re.compile(r"(?<![a-z])(?:chapter|ch)[/_-]?(\d+)", re.IGNORECASE)
_TRAILING_PAGE = re.compile(r"[_-]?\d+\.html?$", re.IGNORECASE)
_LOOSE_HOST = re.compile(r"^[a-z][a-z0-9+.-]*://(?:[^@/?#]*@)?([^/:?#]+)", re.IGNORECASE)

MIN_SEGMENT_MATCH = 0.5


def _base_path(path: str) -> str:
    return _TRAILING_PAGE.sub("", path)


def _chapter_number(path: str) -> Optional[str]:
    match = _CHAPTER_NUMBER.search(path)
    return match.group(1) if match else None


def _loose_host(url: str) -> Optional[str]:
    match = _LOOSE_HOST.match(url.strip())
    return match.group(1).lower() if match else None


def _segments_match(a: str, b: str) -> bool:
    return a == b or (any(c.isdigit() for c in a) and any(c.isdigit() for c in b))


def _compare_paths(path1: str, path2: str, strict: bool) -> bool:
    if path1 == path2:
        return True

    chapter1 = _chapter_number(path1)
    chapter2 = _chapter_number(path2)
    if chapter1 is not None and chapter2 is not None:
        return chapter1 == chapter2

    base1 = _base_path(path1)
    base2 = _base_path(path2)
    if chapter1 is not None or chapter2 is not None:
        return not strict and base1 == base2

    if base1 == base2:
        return True

    parts1 = [p for p in base1.split("/") if p]
    parts2 = [p for p in base2.split("/") if p]
    if abs(len(parts1) - len(parts2)) > 1:
        return False

    matching = sum(1 for a, b in zip(parts1, parts2) if _segments_match(a, b))
    return matching >= min(len(parts1), len(parts2)) * MIN_SEGMENT_MATCH


def same_chapter(origin_url: str, candidate_url: str, *, strict: bool = False) -> bool:
    """Return ``True`` if *candidate_url* plausibly continues *origin_url*'s chapter.

    Rules, in order:

    1. different hostnames → ``False``;
    2. identical paths (only the query differs) → ``True``;
    3. both paths carry a ``chapter``/``ch`` number → equal numbers;
    4. exactly one carries it → base paths (trailing ``_<n>.html``
       stripped) must be equal; always ``False`` when *strict*;
    5. otherwise equal base paths, or segment counts within one of each
       other and at least half of the segments matching.

    URLs that cannot be parsed fall back to a loose hostname comparison, or
    to ``False`` when *strict* is set.
    """
    try:
        u1 = urlsplit(origin_url)
        u2 = urlsplit(candidate_url)
        host1 = u1.hostname
        host2 = u2.hostname
        if not host1 or not host2:
            raise ValueError("missing hostname")
    except ValueError as exc:
        logger.debug("Unparseable URL in chapter check (%s): %r vs %r", exc, origin_url, candidate_url)
        if strict:
            return False
        loose = _loose_host(origin_url)
        return loose is not None and loose == _loose_host(candidate_url)

    if host1 != host2:
        return False
    return _compare_paths(u1.path, u2.path, strict)
