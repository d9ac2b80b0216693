"""Middleware protocol, Next type alias, and MiddlewareSpec.

A middleware is any callable matching::

    def my_mw(request: Request, next: Next, *extra) -> Any: ...

No base class required. The router checks the shape, not the lineage.

``extra`` holds the static arguments given when the middleware was
attached to a route, e.g. ``route.with_middleware((require_role, "admin"))``
calls ``require_role(request, next, "admin")``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from signpost._internal.resolve import is_handler_ref
from signpost.errors import ConfigurationError

# The next layer in the middleware chain (another middleware or the handler)
Next: TypeAlias = Callable[[Any], Any]


class Middleware(Protocol):
    """Protocol for signpost middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(request, next):
            start = time.monotonic()
            result = next(request)
            log.info("took %.3fs", time.monotonic() - start)
            return result

        # Class middleware
        class RequireRole:
            def __call__(self, request, next, role):
                ...
    """

    def __call__(self, request: Any, next: Next, *extra: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class MiddlewareSpec:
    """A middleware together with its static extra arguments."""

    function: Middleware | str
    extra_args: tuple[Any, ...] = ()

    @classmethod
    def coerce(cls, entry: Any) -> MiddlewareSpec:
        """Normalize a middleware entry.

        Accepts a ``MiddlewareSpec``, a callable, a ``"module:attribute"``
        reference, or a ``(function, *extra_args)`` tuple.
        """
        if isinstance(entry, MiddlewareSpec):
            return entry
        extra: tuple[Any, ...] = ()
        if isinstance(entry, tuple | list):
            if not entry:
                msg = "Middleware entry is an empty sequence"
                raise ConfigurationError(msg)
            entry, *rest = entry
            extra = tuple(rest)
        if not is_handler_ref(entry):
            msg = (
                "Middleware must be a callable, an invokable class, "
                "or a 'module:attribute' reference, "
                f"got {type(entry).__name__}"
            )
            raise ConfigurationError(msg)
        return cls(function=entry, extra_args=extra)
