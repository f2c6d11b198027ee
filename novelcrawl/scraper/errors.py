"""Error taxonomy for the crawl engine.

Every failure the engine raises derives from :class:`ExtractionError`, so a
host only has to catch one type while the concrete class and the original
message survive for diagnostics::

    ExtractionError
    ├── FetchError
    │   ├── FetchTimeout
    │   ├── NetworkFailure
    │   ├── HttpStatusFailure
    │   ├── EncodingFailure
    │   └── EmptyOrInvalidResponse
    └── ExtractionFailure
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Content could not be obtained from the requested URL."""


class FetchError(ExtractionError):
    """Base class for failures while retrieving a single page."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeout(FetchError):
    """The request exceeded the per-page deadline."""


class NetworkFailure(FetchError):
    """DNS resolution or connection-level failure."""


class HttpStatusFailure(FetchError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, url: str | None = None, status_code: int = 0) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class EncodingFailure(FetchError):
    """The response body could not be decoded to text."""


class EmptyOrInvalidResponse(FetchError):
    """The body was empty or too short to be an HTML page."""


class ExtractionFailure(ExtractionError):
    """No usable text above the minimum length could be extracted."""
