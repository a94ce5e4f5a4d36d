"""
Canvas test configuration.

Core tests are synchronous and need no IO; the fixtures here supply a fixed
renderer and an in-memory exchange.
"""

from __future__ import annotations

import pytest

from canvas.exchange import BufferedExchange
from canvas.page import Page


class DummyRenderer:
    """Emits a fixed list of lines regardless of the page."""

    def __init__(self, lines: list[str]):
        self.lines = lines
        self.calls = 0

    def generate_html(self, page: Page) -> list[str]:
        self.calls += 1
        return list(self.lines)


@pytest.fixture
def make_renderer():
    return DummyRenderer


@pytest.fixture
def page() -> Page:
    return Page()


@pytest.fixture
def exchange() -> BufferedExchange:
    return BufferedExchange()


@pytest.fixture
def gzip_exchange() -> BufferedExchange:
    return BufferedExchange(request_headers={"Accept-Encoding": "gzip, deflate, br"})
