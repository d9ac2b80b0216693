"""Signpost — declarative HTTP request routing.

Matches requests against an ordered table of path templates, runs the
matched route's middleware onion-style, and calls its handler with
arguments resolved by parameter name.

Basic usage::

    from signpost import Dispatcher, Request, Route, RouteRegistry

    registry = RouteRegistry()

    @registry.route("/hello/{name}", methods=["GET"])
    def hello(name):
        return f"Hello, {name}!"

    dispatcher = Dispatcher(registry)
    dispatcher.run(Request("GET", "/hello/world"))  # "Hello, world!"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Dispatcher",
    "HandlerSignature",
    "ImportResolver",
    "MappingResolver",
    "MethodOverride",
    "Middleware",
    "MiddlewareSpec",
    "MissingArgumentError",
    "Next",
    "PatternError",
    "Request",
    "Route",
    "RouteMatch",
    "RouteRegistry",
    "RouterConfig",
    "SignpostError",
    "compile_path",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "Dispatcher":
        from signpost.dispatcher import Dispatcher

        return Dispatcher

    if name == "RouterConfig":
        from signpost.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from signpost.http.request import Request

        return Request

    if name in ("Route", "RouteMatch"):
        from signpost.routing import route as _route

        return getattr(_route, name)

    if name == "RouteRegistry":
        from signpost.routing.router import RouteRegistry

        return RouteRegistry

    if name == "compile_path":
        from signpost.routing.pattern import compile_path

        return compile_path

    if name == "HandlerSignature":
        from signpost.arguments import HandlerSignature

        return HandlerSignature

    if name in ("ImportResolver", "MappingResolver"):
        from signpost._internal import resolve as _resolve

        return getattr(_resolve, name)

    if name in ("Middleware", "MiddlewareSpec", "Next"):
        from signpost.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "MethodOverride":
        from signpost.middleware.builtin import MethodOverride

        return MethodOverride

    if name in ("SignpostError", "ConfigurationError", "PatternError", "MissingArgumentError"):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
