"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(request, next: Next, *extra_args) -> Any

Built-in middleware:
    MethodOverride -- Rewrite POST to another method from a header
"""

from signpost.middleware.builtin import MethodOverride
from signpost.middleware.protocol import Middleware, MiddlewareSpec, Next

__all__ = [
    "MethodOverride",
    "Middleware",
    "MiddlewareSpec",
    "Next",
]
