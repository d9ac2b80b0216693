"""Middleware chain composition.

Wraps an ordered list of middleware around a terminal handler, onion
style: the first middleware is the outermost layer, the last one sits
directly around the terminal.
"""

from collections.abc import Callable, Sequence
from typing import Any

from signpost.middleware.protocol import MiddlewareSpec, Next


def build_chain(middleware: Sequence[MiddlewareSpec], terminal: Next) -> Next:
    """Return a single ``chain(request)`` callable.

    Every middleware function must already be resolved to a callable.
    Each layer is called as ``function(request, next, *extra_args)``,
    where ``next`` continues with the following layer. A layer may call
    ``next`` with a different request, call it several times, or not
    at all.
    """
    handler = terminal
    for spec in reversed(middleware):
        outer = handler

        def make_next(
            request: Any,
            _mw: Callable[..., Any] = spec.function,  # type: ignore[assignment]
            _extra: tuple[Any, ...] = spec.extra_args,
            _next: Next = outer,
        ) -> Any:
            return _mw(request, _next, *_extra)

        handler = make_next
    return handler
