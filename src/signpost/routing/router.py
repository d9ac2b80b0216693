"""Ordered route registry.

Routes are registered during setup, in priority order: the dispatcher
walks them front to back and the first match wins. Named routes can be
looked up by name; re-registering a name replaces the route in place.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from signpost._internal.types import Handler, HandlerRef
from signpost.config import RouterConfig
from signpost.errors import ConfigurationError
from signpost.routing.route import Route

logger = logging.getLogger("signpost.routing")

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_prefix(prefix: str | None) -> str:
    """Normalize a path prefix.

    ``"api/v1/"``, ``"/api//v1"`` and ``"/api/v1"`` all become
    ``"/api/v1"``; ``""``, ``"/"`` and ``None`` become ``""``.
    """
    stripped = _REPEATED_SLASHES.sub("/", (prefix or "").strip()).strip("/")
    return f"/{stripped}" if stripped else ""


class RouteRegistry:
    """Ordered collection of routes with a name index.

    Usage::

        registry = RouteRegistry()
        registry.add_route(Route.get("/", index))
        registry.add_route_group("/users", {
            "users.list": Route.get("", list_users),
            "users.show": Route.get("/{id:\\d+}", show_user),
        })

    Thread safety:
        Registration is single-threaded. Once a dispatcher is built the
        registry is frozen and only read, so concurrent dispatch needs
        no locks.
    """

    __slots__ = ("_frozen", "_names", "_prefix", "_routes")

    def __init__(self, prefix: str = "") -> None:
        self._routes: list[Route] = []
        self._names: dict[str, int] = {}
        self._prefix = normalize_prefix(prefix)
        self._frozen = False

    @classmethod
    def from_config(cls, config: RouterConfig) -> RouteRegistry:
        """Create a registry using the prefix from *config*."""
        return cls(prefix=config.prefix)

    # -- Registration --

    def add_route(self, route: Route) -> Route:
        """Register *route* behind the current prefix and return the stored route."""
        self._check_not_frozen()
        if self._prefix:
            route = route.with_path(self._prefix + route.path)

        if route.name is not None and route.name in self._names:
            self._routes[self._names[route.name]] = route
            logger.debug("Replaced route %r -> %s", route.name, route.path)
        else:
            if route.name is not None:
                self._names[route.name] = len(self._routes)
            self._routes.append(route)
            logger.debug("Added route %s %s", sorted(route.methods) or "*", route.path)
        return route

    def add_route_group(
        self,
        prefix: str,
        routes: Mapping[Any, Route] | Iterable[Route],
        middleware: Iterable[Any] | None = None,
    ) -> None:
        """Register several routes under a shared prefix.

        *routes* may be a mapping whose string keys become route names,
        or a plain iterable. Group *middleware* wraps around each route's
        own middleware.
        """
        group_prefix = normalize_prefix(prefix)
        group_middleware = tuple(middleware or ())

        items = routes.items() if isinstance(routes, Mapping) else ((None, r) for r in routes)
        for key, route in items:
            if isinstance(key, str):
                route = route.with_name(key)
            if group_prefix:
                route = route.with_path(group_prefix + route.path)
            if group_middleware:
                route = route.with_outer_middleware(*group_middleware)
            self.add_route(route)

    def set_route(
        self,
        path: str,
        handler: HandlerRef,
        methods: Iterable[str] = (),
        name: str | None = None,
    ) -> Route:
        """Create a route and register it. Returns the stored route."""
        route = Route.create(path, handler, methods)
        if name is not None:
            route = route.with_name(name)
        return self.add_route(route)

    def route(
        self,
        path: str,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Path template. Use ``{param}`` for path parameters.
            methods: HTTP methods. Defaults to any method.
            name: Optional route name.
        """

        def decorator(func: Handler) -> Handler:
            self.set_route(path, func, methods or (), name)
            return func

        return decorator

    def set_prefix(self, prefix: str | None) -> None:
        """Set the prefix for routes added from now on."""
        self._check_not_frozen()
        self._prefix = normalize_prefix(prefix)

    def freeze(self) -> None:
        """Reject further registration."""
        self._frozen = True

    # -- Access --

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_route(self, name: str) -> Route | None:
        index = self._names.get(name)
        return None if index is None else self._routes[index]

    def get_routes(self) -> list[Route]:
        """Return all routes in registration (match priority) order."""
        return list(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the route registry after a dispatcher was built from it. "
                "Register all routes before creating the Dispatcher."
            )
            raise ConfigurationError(msg)
