"""PageRenderer protocol: the contract between a Response and the markup it sends.

Any object with ``generate_html(page) -> list[str]`` conforms. The Response
joins the returned fragments with newlines, so an implementation can append
one line (or one chunk) per element without building a large string itself.

Implementations may branch on the canvas template, the canvas tree, or any
other public page accessor. They must not mutate the page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from canvas.page import Page


@runtime_checkable
class PageRenderer(Protocol):
    def generate_html(self, page: Page) -> list[str]: ...
