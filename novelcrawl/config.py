"""Centralised settings for the novelcrawl engine.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Hard upper bound on pages per crawl; MAX_PAGE_CAP can only lower it.
PAGE_CAP_CEILING = 500


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    rate_limit_delay: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_DELAY", "1.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_USER_AGENT", _BROWSER_UA)
    )

    # ------------------------------------------------------------------
    # Crawl policy
    # ------------------------------------------------------------------
    max_page_cap: int = field(
        default_factory=lambda: int(os.environ.get("MAX_PAGE_CAP", "500"))
    )
    # Strict mode never guesses next-page URLs and rejects ambiguous
    # chapter links; lenient mode (the default) does both.
    strict_chapter_guard: bool = field(
        default_factory=lambda: _env_flag("STRICT_CHAPTER_GUARD")
    )

    # ------------------------------------------------------------------
    # Script conversion
    # ------------------------------------------------------------------
    opencc_config: str = field(
        default_factory=lambda: os.environ.get("OPENCC_CONFIG", "s2tw")
    )

    # ------------------------------------------------------------------
    # Logging (applied by the CLI / API hosts, never by the engine)
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton — import this everywhere:
#   from novelcrawl.config import settings
settings = Settings()
