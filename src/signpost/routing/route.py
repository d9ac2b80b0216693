"""Route and RouteMatch frozen dataclasses.

Routes are values: every ``with_*`` method returns a new Route and
leaves the receiver untouched. Validation happens in the constructor,
so a bad method, attribute key, handler, or template fails at
registration rather than on the first request.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from signpost._internal.resolve import is_handler_ref
from signpost._internal.types import HandlerRef
from signpost.errors import ConfigurationError
from signpost.http.request import ALLOWED_METHODS, RequestLike
from signpost.middleware.protocol import MiddlewareSpec
from signpost.routing.pattern import PathMatcher, compile_path

if TYPE_CHECKING:
    from signpost.arguments import HandlerSignature

_ATTRIBUTE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _check_handler(handler: Any) -> None:
    if is_handler_ref(handler):
        return
    msg = (
        "Route handler must be a callable, an invokable class, "
        "or a 'module:attribute' reference, "
        f"got {type(handler).__name__}"
    )
    raise ConfigurationError(msg)


def _normalize_methods(methods: Iterable[str]) -> frozenset[str]:
    if isinstance(methods, str):
        methods = (methods,)
    normalized = frozenset(str(m).upper() for m in methods)
    unknown = normalized - ALLOWED_METHODS
    if unknown:
        msg = (
            f"Unknown HTTP method(s): {', '.join(sorted(unknown))}. "
            f"Allowed: {', '.join(sorted(ALLOWED_METHODS))}"
        )
        raise ConfigurationError(msg)
    return normalized


def _check_attributes(attributes: Mapping[str, Any]) -> None:
    for key in attributes:
        if not isinstance(key, str) or not _ATTRIBUTE_NAME.fullmatch(key):
            msg = f"Invalid attribute name {key!r}; must match [A-Za-z_][A-Za-z0-9_]*"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``methods`` is matched case-insensitively; an empty set matches any
    method. ``attributes`` are static values merged into the handler's
    arguments. ``signature`` optionally names the handler's parameters
    explicitly instead of introspecting them.
    """

    path: str
    handler: HandlerRef
    methods: frozenset[str] = frozenset()
    name: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    middleware: tuple[MiddlewareSpec, ...] = ()
    signature: HandlerSignature | None = None
    _matcher: PathMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_handler(self.handler)
        _check_attributes(self.attributes)
        object.__setattr__(self, "methods", _normalize_methods(self.methods))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(
            self, "middleware", tuple(MiddlewareSpec.coerce(m) for m in self.middleware)
        )
        object.__setattr__(self, "_matcher", compile_path(self.path))

    # -- Factories --

    @classmethod
    def create(cls, path: str, handler: HandlerRef, methods: Iterable[str] = ()) -> Route:
        """Create a route for *methods* (any method when empty)."""
        return cls(path=path, handler=handler, methods=_normalize_methods(methods))

    @classmethod
    def get(cls, path: str, handler: HandlerRef) -> Route:
        return cls(path=path, handler=handler, methods=frozenset({"GET"}))

    @classmethod
    def put(cls, path: str, handler: HandlerRef) -> Route:
        return cls(path=path, handler=handler, methods=frozenset({"PUT"}))

    @classmethod
    def post(cls, path: str, handler: HandlerRef) -> Route:
        return cls(path=path, handler=handler, methods=frozenset({"POST"}))

    @classmethod
    def patch(cls, path: str, handler: HandlerRef) -> Route:
        return cls(path=path, handler=handler, methods=frozenset({"PATCH"}))

    @classmethod
    def delete(cls, path: str, handler: HandlerRef) -> Route:
        return cls(path=path, handler=handler, methods=frozenset({"DELETE"}))

    # -- Matching --

    @property
    def matcher(self) -> PathMatcher:
        """The compiled path template."""
        return self._matcher

    def matches(
        self, request: RequestLike, *, decode_path: bool = True
    ) -> tuple[bool, dict[str, str]]:
        """Test *request* against this route's methods and path.

        Returns ``(True, path_params)`` on a match and ``(False, {})``
        otherwise.
        """
        path = unquote(request.path) if decode_path else request.path
        params = self.match_path(request.method, path)
        if params is None:
            return False, {}
        return True, params

    def match_path(self, method: str, path: str) -> dict[str, str] | None:
        """Match an already-decoded *path* and *method*.

        Returns the captured path parameters, or ``None``.
        """
        if self.methods and method.upper() not in self.methods:
            return None
        return self._matcher.match(path)

    # -- Copies --

    def with_attributes(self, attributes: Mapping[str, Any]) -> Route:
        """Return a copy with *attributes* merged over the current ones."""
        _check_attributes(attributes)
        return dataclasses.replace(self, attributes={**self.attributes, **attributes})

    def with_middleware(self, *entries: Any) -> Route:
        """Return a copy whose middleware list is *entries*, in order.

        Each entry is a callable, a ``"module:attribute"`` reference, a
        ``(function, *extra_args)`` tuple, or a ``MiddlewareSpec``.
        """
        return dataclasses.replace(self, middleware=tuple(entries))

    def with_outer_middleware(self, *entries: Any) -> Route:
        """Return a copy with *entries* wrapped around the existing middleware."""
        return dataclasses.replace(self, middleware=(*entries, *self.middleware))

    def with_name(self, name: str) -> Route:
        return dataclasses.replace(self, name=name)

    def with_path(self, path: str) -> Route:
        return dataclasses.replace(self, path=path)

    def with_signature(self, signature: HandlerSignature) -> Route:
        return dataclasses.replace(self, signature=signature)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
