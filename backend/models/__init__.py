"""
Pydantic models for the Canvas server.

All data shapes defined here. No imports from routes or services.
"""

from backend.models.page import CanvasPayload, NodePayload, PagePayload

__all__ = [
    "NodePayload",
    "CanvasPayload",
    "PagePayload",
]
