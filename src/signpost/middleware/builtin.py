"""Built-in middleware: method override.

HTML forms can only send GET and POST. ``MethodOverride`` lets a POST
stand in for another method by naming it in a header, rewriting the
request before inner layers and the handler see it.
"""

import logging
from typing import Any

from signpost.http.request import ALLOWED_METHODS
from signpost.middleware.protocol import Next

logger = logging.getLogger("signpost.dispatch")


class MethodOverride:
    """Rewrite a POST request's method from an override header.

    Usage::

        route = Route.post("/posts/{id}", update_post).with_middleware(MethodOverride())

    Only overrides to one of the allowed HTTP methods are honored;
    anything else passes the request through unchanged.
    """

    __slots__ = ("header",)

    def __init__(self, header: str = "X-HTTP-Method-Override") -> None:
        self.header = header

    def __call__(self, request: Any, next: Next) -> Any:
        if request.method.upper() != "POST":
            return next(request)
        override = (request.header(self.header) or "").strip().upper()
        if override and override != "POST" and override in ALLOWED_METHODS:
            logger.debug("Overriding POST %s with %s", request.path, override)
            return next(request.with_method(override))
        return next(request)
