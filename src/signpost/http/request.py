"""Immutable HTTP request.

The routing core only reads a request's method and path, and asks it
for derived copies when middleware rewrites one of them. ``Request``
is a small frozen implementation of that capability; any object
satisfying ``RequestLike`` can be dispatched instead.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol
from urllib.parse import urlsplit

ALLOWED_METHODS: frozenset[str] = frozenset(
    {"GET", "PUT", "POST", "PATCH", "DELETE", "HEAD", "OPTIONS"}
)


class RequestLike(Protocol):
    """What the router needs from a request."""

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the raw URI path as received, still percent-encoded.
    Decoding happens during route matching.
    """

    method: str
    path: str
    query_string: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header named *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default

    def with_method(self, method: str) -> Request:
        """Return a copy with a different method."""
        return replace(self, method=method.upper())

    def with_path(self, path: str) -> Request:
        """Return a copy with a different path."""
        return replace(self, path=path)

    # -- Factory --

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: tuple[tuple[str, str], ...] = (),
    ) -> Request:
        """Create a Request from a method and a URL or path-with-query."""
        parts = urlsplit(url)
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            query_string=parts.query,
            headers=headers,
        )
