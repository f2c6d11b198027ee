"""Simplified / Traditional Chinese detection and conversion.

Detection is a cheap heuristic cascade over a handful of fixed characters,
not a language detector.  Conversion is delegated to OpenCC and is
best-effort: any failure returns the input unchanged.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from opencc import OpenCC

from novelcrawl.config import settings

logger = logging.getLogger(__name__)

# Characters that only occur in one of the two scripts.
SIMPLIFIED_ONLY = frozenset("简体")
TRADITIONAL_ONLY = frozenset("繁體")

# (simplified, traditional) forms of high-frequency words.
VARIANT_PAIRS = (
    ("这", "這"),
    ("为", "為"),
    ("会", "會"),
    ("说", "說"),
    ("时", "時"),
    ("个", "個"),
    ("们", "們"),
    ("来", "來"),
    ("对", "對"),
    ("没", "沒"),
    ("过", "過"),
    ("还", "還"),
)
_SIMPLIFIED_FORMS = frozenset(s for s, _ in VARIANT_PAIRS)
_TRADITIONAL_FORMS = frozenset(t for _, t in VARIANT_PAIRS)


def is_simplified(text: str) -> bool:
    """Return ``True`` if *text* looks like Simplified Chinese.

    Evaluated in order, first decisive signal wins:

    1. any Simplified-only character → ``True``;
    2. any Traditional-only character → ``False``;
    3. more Simplified than Traditional variant-pair forms → ``True``
       (ties, including zero/zero, → ``False``).
    """
    chars = set(text)
    if chars & SIMPLIFIED_ONLY:
        return True
    if chars & TRADITIONAL_ONLY:
        return False

    simplified = sum(1 for ch in text if ch in _SIMPLIFIED_FORMS)
    traditional = sum(1 for ch in text if ch in _TRADITIONAL_FORMS)
    return simplified > traditional


@lru_cache(maxsize=None)
def _converter(config: str) -> OpenCC:
    return OpenCC(config)


def to_traditional(text: str) -> str:
    """Convert Simplified Chinese *text* to Traditional Chinese.

    Never raises: on any OpenCC error the original *text* is returned.
    """
    if not text:
        return text
    try:
        return _converter(settings.opencc_config).convert(text)
    except Exception as exc:
        logger.warning("Traditional Chinese conversion failed, keeping original: %s", exc)
        return text
