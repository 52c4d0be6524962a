"""FastAPI application serving the static index page."""

from __future__ import annotations

import logging
from importlib import resources

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = "index.html"


def load_template(name: str) -> str:
    """Read a packaged template."""
    template = resources.files("schemadict.web").joinpath("templates").joinpath(name)
    return template.read_text(encoding="utf-8")


def create_app(template: str = INDEX_TEMPLATE) -> FastAPI:
    """
    Build the web application.

    Args:
        template: Packaged template rendered at GET /
    """
    app = FastAPI(title="schemadict", docs_url=None, redoc_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def index():
        try:
            page = load_template(template)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Template error: %s", e)
            return PlainTextResponse(f"Template error: {e}", status_code=500)
        return HTMLResponse(page)

    return app
