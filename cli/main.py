"""novelcrawl CLI — entry-point for the crawl engine.

Usage:
    python cli/main.py --help
    python cli/main.py scrape https://example.com/novel/ch1 --pages 20 --output ch1.txt
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from novelcrawl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import logging
from typing import Optional

import typer

from novelcrawl.config import settings
from novelcrawl.scraper import PAGE_SEPARATOR, ExtractionError, scrape

app = typer.Typer(
    name="novelcrawl",
    help="Extract novel chapters from web pages.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every crawl decision."),
) -> None:
    """Configure logging for all sub-commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s [%(name)s] %(message)s",
    )


@app.command("scrape")
def scrape_cmd(
    url: str = typer.Argument(..., help="URL of the first page to scrape."),
    pages: Optional[int] = typer.Option(
        None, "--pages", "-p", help="Follow next-page links up to this many pages."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the content to this file instead of stdout."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Never guess next-page URLs (overrides STRICT_CHAPTER_GUARD)."
    ),
) -> None:
    """Scrape a URL and print (or save) its cleaned text."""
    typer.echo(f"[scrape] Fetching {url!r} …", err=True)
    try:
        # None defers to settings.strict_chapter_guard.
        document = asyncio.run(scrape(url, pages, strict=strict or None))
    except ExtractionError as exc:
        typer.echo(f"[scrape] Error: {exc}", err=True)
        raise typer.Exit(code=1)

    page_total = document.content.count(PAGE_SEPARATOR) + 1
    typer.echo(f"[scrape] Title  : {document.title}", err=True)
    typer.echo(f"[scrape] Pages  : {page_total}", err=True)
    typer.echo(f"[scrape] Chars  : {len(document.content)}", err=True)

    if output is not None:
        output.write_text(document.content, encoding="utf-8")
        typer.echo(f"[scrape] Saved to {output}", err=True)
    else:
        typer.echo("")
        typer.echo(document.content)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
