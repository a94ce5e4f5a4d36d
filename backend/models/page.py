"""Page hydration models: the wire format of Page.to_dict()."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from canvas.node import CANVAS_NODE_NAME, Canvas, Node
from canvas.page import Page
from canvas.types import DEFAULT_CHARSET, DEFAULT_LOCALE, DEFAULT_TEMPLATE, PageFlag

# Every PageFlag bit set
_ALL_FLAGS = int(
    PageFlag.CSP_ENABLED | PageFlag.NO_INDEX | PageFlag.NO_FOLLOW | PageFlag.NO_CACHE | PageFlag.FORCE_HTTPS
)


class NodePayload(BaseModel):
    """One node of the tree: {name, props, children}."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    props: dict[str, Any] = Field(default_factory=dict)
    children: list[NodePayload] = Field(default_factory=list)

    def to_node(self) -> Node:
        node = Node(self.name, self.props)
        _attach_children(node, self.children)
        return node


class CanvasPayload(NodePayload):
    """The root node, with the template identifier."""

    name: Literal["canvas"] = CANVAS_NODE_NAME
    template: str = DEFAULT_TEMPLATE

    def to_canvas(self) -> Canvas:
        canvas = Canvas(self.template, self.props)
        _attach_children(canvas, self.children)
        return canvas


class PagePayload(BaseModel):
    """A whole page as sent to hydration clients and accepted by /api/render."""

    model_config = {"extra": "forbid"}

    title: str = ""
    locale: str = DEFAULT_LOCALE
    charset: str = DEFAULT_CHARSET
    flags: int = Field(default=0, ge=0, le=_ALL_FLAGS)
    meta: dict[str, str] = Field(default_factory=dict)
    seo: dict[str, str] = Field(default_factory=dict)
    csp: dict[str, str | list[str]] = Field(default_factory=dict)
    canvas: CanvasPayload = Field(default_factory=CanvasPayload)

    @classmethod
    def from_page(cls, page: Page) -> PagePayload:
        return cls.model_validate(page.to_dict())

    def to_page(self) -> Page:
        page = (
            Page()
            .set_canvas(self.canvas.to_canvas())
            .set_title(self.title)
            .set_locale(self.locale)
            .set_charset(self.charset)
        )
        for name, content in self.meta.items():
            page.set_meta(name, content)
        for name, content in self.seo.items():
            page.set_seo(name, content)
        for directive, value in self.csp.items():
            page.set_csp(directive, value)

        flags = PageFlag(self.flags)
        page.enable_csp(PageFlag.CSP_ENABLED in flags)
        page.no_index(PageFlag.NO_INDEX in flags)
        page.no_follow(PageFlag.NO_FOLLOW in flags)
        page.no_cache(PageFlag.NO_CACHE in flags)
        page.force_https(PageFlag.FORCE_HTTPS in flags)
        return page


def _attach_children(node: Node, children: list[NodePayload]) -> None:
    for child in children:
        node.add_child(child.to_node())
