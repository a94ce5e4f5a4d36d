"""
Canvas: Shared Types

Value types and flags shared by the node tree, the page and the response.
"""

from __future__ import annotations

import enum
from typing import Union

# Node props and hydration payloads are plain JSON.
JsonValue = Union[str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]]

# A CSP directive is a single token, a token list, or "" for a name-only directive.
CspValue = Union[str, list[str]]


# ---------------------------------------------------------------------------
# Page flags
# ---------------------------------------------------------------------------


class PageFlag(enum.IntFlag):
    """Independent behaviour switches on a page. Serialized as a raw integer."""

    CSP_ENABLED = 1 << 0
    NO_INDEX = 1 << 1
    NO_FOLLOW = 1 << 2
    NO_CACHE = 1 << 3
    FORCE_HTTPS = 1 << 4


# ---------------------------------------------------------------------------
# Page defaults
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE = "page/default"
DEFAULT_LOCALE = "en-GB"
DEFAULT_CHARSET = "UTF-8"

UNSAFE_INLINE = "'unsafe-inline'"
SELF = "'self'"
