"""
Canvas: Template renderer

Renders the canvas tree server-side with Mustache templates (chevron):

  - the canvas ``template`` identifier picks the document template
  - each node is rendered with the partial registered under its name,
    seeing the node's props plus ``{{{children}}}`` (its rendered children)
  - nodes without a partial render as ``<div data-node="name">...</div>``

Document templates see ``title``, ``locale``, ``charset``, ``meta`` and
``seo`` (lists of ``{name, content}``) and ``{{{body}}}``.

Pure function of the page. No IO.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import chevron

from canvas.node import CANVAS_NODE_NAME, Node
from canvas.page import Page
from canvas.spa import escape
from canvas.types import DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT = """<!DOCTYPE html>
<html lang="{{locale}}">
<head>
<meta charset="{{charset}}">
<title>{{title}}</title>
{{#meta}}
<meta name="{{name}}" content="{{content}}">
{{/meta}}
{{#seo}}
<meta property="{{name}}" content="{{content}}">
{{/seo}}
</head>
<body>
{{{body}}}
</body>
</html>"""


def _default_documents() -> dict[str, str]:
    return {DEFAULT_TEMPLATE: DEFAULT_DOCUMENT}


@dataclass
class TemplateRenderer:
    """Server-side Mustache renderer. Satisfies PageRenderer."""

    documents: dict[str, str] = field(default_factory=_default_documents)
    node_templates: dict[str, str] = field(default_factory=dict)

    def generate_html(self, page: Page) -> list[str]:
        document = self._document_for(page.canvas.template)
        context = {
            "title": page.title,
            "locale": page.locale,
            "charset": page.charset,
            "meta": [{"name": k, "content": v} for k, v in page.meta_tags.items()],
            "seo": [{"name": k, "content": v} for k, v in page.seo_tags.items()],
            "body": self.render_node(page.canvas),
        }
        return chevron.render(document, context).split("\n")

    def render_node(self, node: Node) -> str:
        """Render a node and its subtree to an HTML fragment."""
        children = "\n".join(self.render_node(child) for child in node.children)

        template = self.node_templates.get(node.name)
        if template is None:
            if node.name == CANVAS_NODE_NAME:
                return children
            return f'<div data-node="{escape(node.name)}">{children}</div>'

        context: dict[str, Any] = node.props
        context["name"] = node.name
        context["children"] = children
        try:
            return chevron.render(template, context)
        except chevron.ChevronError:
            logger.warning("templates: invalid template for node %r, using default markup", node.name)
            return f'<div data-node="{escape(node.name)}">{children}</div>'

    def _document_for(self, template_id: str) -> str:
        document = self.documents.get(template_id)
        if document is None:
            logger.warning("templates: unknown template %r, falling back to %s", template_id, DEFAULT_TEMPLATE)
            return self.documents.get(DEFAULT_TEMPLATE, DEFAULT_DOCUMENT)
        return document
