"""
Pytest configuration and fixtures for the Canvas server tests.
"""

from __future__ import annotations

import httpx
import pytest_asyncio

from backend.main import app


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
