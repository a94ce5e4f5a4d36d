"""
Canvas server configuration: all environment variables in one place.

Read from environment at import. Nothing is required; every setting has a
development default.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}") from None


def _env_list(name: str, default: list[str]) -> list[str]:
    """Comma-separated list; blank entries are dropped."""
    value = os.environ.get(name)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    # Site defaults for pages built by the server
    SITE_TITLE: str = os.environ.get("CANVAS_SITE_TITLE", "Canvas")
    SITE_LOCALE: str = os.environ.get("CANVAS_SITE_LOCALE", "en-GB")

    # Response compression
    COMPRESSION_ENABLED: bool = _env_bool("CANVAS_COMPRESSION", True)
    COMPRESSION_LEVEL: int = _env_int("CANVAS_COMPRESSION_LEVEL", 6)  # clamped to 1-9 by Response

    # SPA shell
    SPA_JS_URLS: list[str] = _env_list("CANVAS_SPA_JS_URLS", ["/static/app.js"])
    SPA_CSS_URLS: list[str] = _env_list("CANVAS_SPA_CSS_URLS", [])
    SPA_MOUNT_ELEMENT: str = os.environ.get("CANVAS_MOUNT_ELEMENT", "app")

    @property
    def FORCE_HTTPS(self) -> bool:
        """Explicit CANVAS_FORCE_HTTPS wins; otherwise on outside development."""
        return _env_bool("CANVAS_FORCE_HTTPS", self.ENVIRONMENT != "development")


# Singleton instance
settings = Settings()
