"""
Canvas: server-side page composition.

Components:
  node       Node tree and the Canvas root
  page       Page: metadata, meta/SEO tags, CSP, behaviour flags
  renderer   PageRenderer contract: page → ordered HTML fragments
  response   Response: render, gzip, synthesise headers, write to an Exchange
  exchange   Exchange contract and the in-memory BufferedExchange

Bundled renderers:
  spa        SinglePageApplicationRenderer (SPA shell + hydration state)
  templates  TemplateRenderer (Mustache, server-rendered tree)
"""

from canvas.exchange import BufferedExchange, Exchange
from canvas.node import Canvas, Node
from canvas.page import Page
from canvas.renderer import PageRenderer
from canvas.response import Response
from canvas.spa import SinglePageApplicationRenderer
from canvas.templates import TemplateRenderer
from canvas.types import PageFlag

__all__ = [
    "Node",
    "Canvas",
    "Page",
    "PageFlag",
    "PageRenderer",
    "Response",
    "Exchange",
    "BufferedExchange",
    "SinglePageApplicationRenderer",
    "TemplateRenderer",
]
