"""
Canvas: Node tree

A Node is a labelled element with ordered children and a property map.
Parents own their children; a child only holds a weak reference back to its
parent, so dropping the root releases the whole tree.

Invariants:
  - a node has at most one parent
  - a node is in its parent's children iff that parent is its recorded parent
  - child order is insertion order, with no gaps after removal
"""

from __future__ import annotations

import copy
import weakref
from collections.abc import Iterator, Mapping
from typing import Any

from canvas.types import JsonValue

CANVAS_NODE_NAME = "canvas"


class Node:
    """A labelled tree element with properties and ordered children."""

    def __init__(self, name: str, props: Mapping[str, JsonValue] | None = None) -> None:
        self._name = name
        self._props: dict[str, JsonValue] = dict(props or {})
        self._children: list[Node] = []
        self._parent: weakref.ref[Node] | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, children={len(self._children)})"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    # ------------------------------------------------------------------
    # Parent relationship
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Node | None:
        """The parent node, or None for a root (or a parent that was dropped)."""
        if self._parent is None:
            return None
        return self._parent()

    def is_root(self) -> bool:
        return self.parent is None

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def children(self) -> list[Node]:
        """A copy of the child list. Mutating it does not touch the tree."""
        return list(self._children)

    def has_children(self) -> bool:
        return bool(self._children)

    def add_child(self, child: Node) -> Node:
        """
        Append child, detaching it from any previous parent first.
        Returns self for chaining.
        """
        previous = child.parent
        if previous is not None:
            previous.remove_child(child)

        child._parent = weakref.ref(self)
        self._children.append(child)
        return self

    def remove_child(self, child: Node) -> Node:
        """Remove child by identity. No-op when it is not a child of this node."""
        for index, existing in enumerate(self._children):
            if existing is child:
                del self._children[index]
                child._parent = None
                break
        return self

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def depth_first(self) -> Iterator[Node]:
        """Traverse the subtree pre-order, yielding self then children."""
        yield self
        for child in self._children:
            yield from child.depth_first()

    def get_child_by_name(self, name: str) -> Node | None:
        """First node named `name` in this subtree, self included."""
        for node in self.depth_first():
            if node._name == name:
                return node
        return None

    def get_child_where_prop(self, key: str, value: str) -> Node | None:
        """First node in this subtree whose prop `key` is the string `value`."""
        for node in self.depth_first():
            prop = node._props.get(key)
            if isinstance(prop, str) and prop == value:
                return node
        return None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def props(self) -> dict[str, JsonValue]:
        """A deep copy of the property map."""
        return copy.deepcopy(self._props)

    def get_prop(self, key: str, default: Any = None) -> Any:
        return self._props.get(key, default)

    def set_prop(self, key: str, value: JsonValue) -> Node:
        self._props[key] = value
        return self

    def set_props(self, props: Mapping[str, JsonValue]) -> Node:
        """Replace the whole property map."""
        self._props = dict(props)
        return self

    def remove_prop(self, key: str) -> Node:
        self._props.pop(key, None)
        return self

    def has_prop(self, key: str) -> bool:
        return key in self._props

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "props": copy.deepcopy(self._props),
            "children": [child.to_dict() for child in self._children],
        }


class Canvas(Node):
    """The root node of a page. Carries the template identifier for renderers."""

    def __init__(self, template: str, props: Mapping[str, JsonValue] | None = None) -> None:
        super().__init__(CANVAS_NODE_NAME, props)
        self._template = template

    @property
    def template(self) -> str:
        return self._template

    @template.setter
    def template(self, value: str) -> None:
        self._template = value

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["template"] = self._template
        return data
