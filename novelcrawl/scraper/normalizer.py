"""Whitespace and paragraph normalization for extracted text.

Rules, applied line by line:

* runs of horizontal whitespace (spaces, tabs, NBSP, ideographic space)
  collapse to a single space and each line is trimmed;
* consecutive non-empty lines stay joined by a single ``\\n``;
* one or more empty lines become exactly one paragraph break (``\\n\\n``).

The result is idempotent: ``normalize(normalize(x)) == normalize(x)``.
"""

from __future__ import annotations

import re

# Any whitespace character except the newline itself.
_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_BREAK_RUN = re.compile(r"\n{3,}")


def normalize(raw: str) -> str:
    """Return *raw* with collapsed whitespace and single blank-line paragraphs."""
    if not raw:
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")

    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        line = _HORIZONTAL_WS.sub(" ", line).strip()
        if line:
            current.append(line)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))

    result = "\n\n".join(paragraphs)
    return _BREAK_RUN.sub("\n\n", result).strip()
