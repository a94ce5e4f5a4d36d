"""Starlette exchange: runs a canvas Response against a FastAPI request."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request, Response

from canvas.exchange import BufferedExchange


@dataclass
class StarletteExchange(BufferedExchange):
    """
    BufferedExchange fed from an incoming FastAPI request.

    After the canvas Response has been sent into it, to_response() hands
    the collected status, headers and body back to FastAPI. Starlette adds
    Content-Length itself when the canvas Response left it out (gzip bodies).
    """

    @classmethod
    def from_request(cls, request: Request) -> StarletteExchange:
        return cls(request_headers=dict(request.headers))

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status if self.status is not None else 200,
            headers=dict(self.headers),
        )
