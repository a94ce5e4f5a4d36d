"""
Canvas FastAPI application.

Entry point for the page server.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from backend.config import settings
from backend.routes import pages as pages_routes

logging.basicConfig(
    level=logging.DEBUG if settings.ENVIRONMENT == "development" else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Canvas",
    docs_url=None,
    redoc_url=None,
)

# Register routes
app.include_router(pages_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
