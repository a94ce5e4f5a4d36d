"""
Canvas: HTTP exchange

The transport context a Response reads the request from and writes the reply
to. The core never touches a socket or a framework object directly; the
hosting application passes in something that satisfies ``Exchange``.

BufferedExchange is the in-memory implementation: it collects status,
headers and body so they can be inspected or handed to a web framework.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Exchange(Protocol):
    def request_header(self, name: str) -> str | None: ...

    def set_status(self, code: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def write(self, body: bytes) -> None: ...


@dataclass
class BufferedExchange:
    """
    In-memory exchange.

    Request header lookup is case-insensitive. set_header replaces an earlier
    header of the same name (case-insensitively) but keeps its first position.
    """

    request_headers: dict[str, str] = field(default_factory=dict)
    status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def request_header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.request_headers.items():
            if key.lower() == wanted:
                return value
        return None

    def set_status(self, code: int) -> None:
        self.status = code

    def set_header(self, name: str, value: str) -> None:
        existing = self._find_header(name)
        if existing is not None and existing != name:
            # keep insertion position, adopt the latest spelling
            self.headers = {(name if k == existing else k): v for k, v in self.headers.items()}
        self.headers[name] = value

    def write(self, body: bytes) -> None:
        self.body += body

    def header(self, name: str) -> str | None:
        """Look up an emitted header case-insensitively."""
        existing = self._find_header(name)
        return None if existing is None else self.headers[existing]

    def _find_header(self, name: str) -> str | None:
        wanted = name.lower()
        for key in self.headers:
            if key.lower() == wanted:
                return key
        return None
