"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from novelcrawl.api import app

    uvicorn novelcrawl.api:app --reload
"""

from novelcrawl.api.app import app

__all__ = ["app"]
