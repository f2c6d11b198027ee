"""FastAPI application factory.

Routers
-------

    /scrape    — extract a novel chapter (optionally multi-page) from a URL
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from novelcrawl.config import settings

from novelcrawl.api.routers import scrape as scrape_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="novelcrawl API",
        description=(
            "HTTP interface for the novelcrawl engine. Turns a chapter URL "
            "into cleaned, paginated prose text and a title."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn novelcrawl.api.app:app --reload
app = create_app()
