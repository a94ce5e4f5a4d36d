"""
Canvas: Page

A Page wraps one Canvas with document metadata (title, locale, charset),
meta and SEO tag maps, a Content Security Policy and behaviour flags.

Every mutator returns the page so calls can be chained:

    page = Page().set_title("Home").use_strict_policy().enable_csp().no_index()
"""

from __future__ import annotations

from typing import Any

from canvas.node import Canvas
from canvas.types import (
    DEFAULT_CHARSET,
    DEFAULT_LOCALE,
    DEFAULT_TEMPLATE,
    SELF,
    UNSAFE_INLINE,
    CspValue,
    PageFlag,
)


class Page:
    """Document metadata, security policy and the canvas tree for one page."""

    def __init__(self) -> None:
        self._canvas = Canvas(DEFAULT_TEMPLATE)
        self._title = ""
        self._locale = DEFAULT_LOCALE
        self._charset = DEFAULT_CHARSET
        self._meta_tags: dict[str, str] = {}
        self._seo_tags: dict[str, str] = {}
        self._csp: dict[str, CspValue] = {}
        self._flags = PageFlag(0)

    # ------------------------------------------------------------------
    # Canvas
    # ------------------------------------------------------------------

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    def set_canvas(self, canvas: Canvas) -> Page:
        self._canvas = canvas
        return self

    # ------------------------------------------------------------------
    # Document properties
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    def set_title(self, title: str) -> Page:
        self._title = title
        return self

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> Page:
        self._locale = locale
        return self

    @property
    def charset(self) -> str:
        return self._charset

    def set_charset(self, charset: str) -> Page:
        self._charset = charset
        return self

    # ------------------------------------------------------------------
    # Meta and SEO tags
    # ------------------------------------------------------------------

    @property
    def meta_tags(self) -> dict[str, str]:
        return dict(self._meta_tags)

    def set_meta(self, name: str, content: str) -> Page:
        self._meta_tags[name] = content
        return self

    def remove_meta(self, name: str) -> Page:
        self._meta_tags.pop(name, None)
        return self

    @property
    def seo_tags(self) -> dict[str, str]:
        """Open Graph, Twitter card and similar property tags."""
        return dict(self._seo_tags)

    def set_seo(self, name: str, content: str) -> Page:
        self._seo_tags[name] = content
        return self

    # ------------------------------------------------------------------
    # Content Security Policy
    # ------------------------------------------------------------------

    @property
    def csp(self) -> dict[str, CspValue]:
        return {d: list(v) if isinstance(v, list) else v for d, v in self._csp.items()}

    def set_csp(self, directive: str, value: CspValue) -> Page:
        """Overwrite a directive. A list value is stored as a copy."""
        self._csp[directive] = list(value) if isinstance(value, list) else value
        return self

    def allow_script_from(self, *sources: str) -> Page:
        return self._add_csp_sources("script-src", sources)

    def allow_style_from(self, *sources: str) -> Page:
        return self._add_csp_sources("style-src", sources)

    def allow_image_from(self, *sources: str) -> Page:
        return self._add_csp_sources("img-src", sources)

    def allow_font_from(self, *sources: str) -> Page:
        return self._add_csp_sources("font-src", sources)

    def allow_connect_to(self, *sources: str) -> Page:
        return self._add_csp_sources("connect-src", sources)

    def allow_media_from(self, *sources: str) -> Page:
        return self._add_csp_sources("media-src", sources)

    def allow_frame_from(self, *sources: str) -> Page:
        return self._add_csp_sources("frame-src", sources)

    def allow_inline_styles(self) -> Page:
        return self._add_csp_sources("style-src", (UNSAFE_INLINE,))

    def allow_inline_scripts(self) -> Page:
        return self._add_csp_sources("script-src", (UNSAFE_INLINE,))

    def block_all_mixed(self) -> Page:
        # "" renders as the bare directive name
        self._csp["block-all-mixed-content"] = ""
        return self

    def require_sri(self) -> Page:
        self._csp["require-sri-for"] = ["script", "style"]
        return self

    def use_strict_policy(self) -> Page:
        return self.set_csp("default-src", [SELF])

    def _add_csp_sources(self, directive: str, sources: tuple[str, ...]) -> Page:
        current = self._csp.get(directive, [])
        if isinstance(current, str):
            current = [current]
        self._csp[directive] = list(dict.fromkeys([*current, *sources]))
        return self

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------

    @property
    def flags(self) -> PageFlag:
        return self._flags

    def has_flag(self, flag: PageFlag) -> bool:
        return (self._flags & flag) == flag

    def enable_csp(self, enabled: bool = True) -> Page:
        return self._set_flag(PageFlag.CSP_ENABLED, enabled)

    def is_csp_enabled(self) -> bool:
        return self.has_flag(PageFlag.CSP_ENABLED)

    def no_index(self, enabled: bool = True) -> Page:
        return self._set_flag(PageFlag.NO_INDEX, enabled)

    def no_follow(self, enabled: bool = True) -> Page:
        return self._set_flag(PageFlag.NO_FOLLOW, enabled)

    def no_cache(self, enabled: bool = True) -> Page:
        return self._set_flag(PageFlag.NO_CACHE, enabled)

    def force_https(self, enabled: bool = True) -> Page:
        return self._set_flag(PageFlag.FORCE_HTTPS, enabled)

    def _set_flag(self, flag: PageFlag, enabled: bool) -> Page:
        if enabled:
            self._flags |= flag
        else:
            self._flags &= ~flag
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """The hydration payload. Field names are a wire contract."""
        return {
            "title": self._title,
            "locale": self._locale,
            "charset": self._charset,
            "flags": int(self._flags),
            "meta": dict(self._meta_tags),
            "seo": dict(self._seo_tags),
            "csp": self.csp,
            "canvas": self._canvas.to_dict(),
        }
