"""Request dispatch: run the matched route through its middleware into its handler.

Building a ``Dispatcher`` freezes its registry and compiles every route
into a ready-to-call entry: handler and middleware references resolved,
handler signatures read. Resolution errors surface here, at startup,
never while serving a request.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from signpost._internal.resolve import HandlerResolver, ImportResolver
from signpost.arguments import HandlerSignature, call_with_arguments
from signpost.config import RouterConfig
from signpost.errors import ConfigurationError
from signpost.http.request import RequestLike
from signpost.middleware.chain import build_chain
from signpost.middleware.protocol import MiddlewareSpec
from signpost.routing.route import Route, RouteMatch
from signpost.routing.router import RouteRegistry, normalize_prefix

logger = logging.getLogger("signpost.dispatch")


@dataclass(frozen=True, slots=True)
class _CompiledRoute:
    """A route with its references resolved."""

    route: Route
    action: Callable[..., Any]
    signature: HandlerSignature
    middleware: tuple[MiddlewareSpec, ...]


class Dispatcher:
    """Dispatch requests against a frozen route registry.

    Usage::

        registry = RouteRegistry()
        registry.add_route(Route.get("/users/{id}", show_user))
        dispatcher = Dispatcher(registry, RouterConfig(fallback=not_found))
        result = dispatcher.run(request, {"db": db})

    Argument precedence, lowest first: ``config.arguments``, run-time
    *arguments*, route attributes, path parameters. ``request``,
    ``route`` and ``parameters`` are always bound by the dispatcher and
    cannot be overridden.

    Thread safety:
        All per-request state is built fresh inside ``run()``. The
        compiled route table is never mutated after construction.
    """

    __slots__ = ("_compiled", "_fallback", "_registry", "_resolver", "config")

    def __init__(
        self,
        registry: RouteRegistry,
        config: RouterConfig | None = None,
        *,
        resolver: HandlerResolver | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._registry = registry
        self._resolver: HandlerResolver = resolver or ImportResolver()

        if self.config.prefix and normalize_prefix(self.config.prefix) != registry.prefix:
            msg = (
                f"RouterConfig.prefix {self.config.prefix!r} does not match the registry "
                f"prefix {registry.prefix!r}. Build the registry with "
                "RouteRegistry.from_config(config) so routes get the prefix."
            )
            raise ConfigurationError(msg)

        registry.freeze()
        self._compiled: tuple[_CompiledRoute, ...] = tuple(
            self._compile(route) for route in registry
        )
        self._fallback: tuple[Callable[..., Any], HandlerSignature] | None = None
        if self.config.fallback is not None:
            fallback = self._resolver.resolve(self.config.fallback)
            self._fallback = (fallback, HandlerSignature.of(fallback))
        logger.debug("Dispatcher ready with %d routes", len(self._compiled))

    @property
    def registry(self) -> RouteRegistry:
        return self._registry

    @property
    def fallback(self) -> Callable[..., Any] | None:
        return self._fallback[0] if self._fallback is not None else None

    def match(self, request: RequestLike) -> RouteMatch | None:
        """Return the first route matching *request*, or ``None``."""
        found = self._lookup(request)
        if found is None:
            return None
        entry, params = found
        return RouteMatch(route=entry.route, path_params=params)

    def run(self, request: RequestLike, arguments: Mapping[str, Any] | None = None) -> Any:
        """Dispatch *request* and return the action's result.

        Returns ``None`` when nothing matches and no fallback is
        configured. Exceptions from handlers and middleware propagate.
        """
        found = self._lookup(request)

        bag: dict[str, Any] = {**self.config.arguments, **(arguments or {})}
        params: dict[str, str] = {}
        route: Route | None = None
        middleware: tuple[MiddlewareSpec, ...] = ()

        if found is not None:
            entry, params = found
            route = entry.route
            action, signature = entry.action, entry.signature
            middleware = entry.middleware
            bag.update(route.attributes)
            bag.update(params)
        elif self._fallback is not None:
            action, signature = self._fallback
            logger.debug("No route for %s %s, using fallback", request.method, request.path)
        else:
            logger.debug("No route for %s %s", request.method, request.path)
            return None

        bag["route"] = route
        bag["parameters"] = params
        strict = self.config.strict_arguments

        def terminal(req: Any) -> Any:
            return call_with_arguments(action, signature, {**bag, "request": req}, strict=strict)

        if middleware:
            return build_chain(middleware, terminal)(request)
        return terminal(request)

    # -- Internal --

    def _lookup(self, request: RequestLike) -> tuple[_CompiledRoute, dict[str, str]] | None:
        path = unquote(request.path) if self.config.decode_path else request.path
        method = request.method
        for entry in self._compiled:
            params = entry.route.match_path(method, path)
            if params is not None:
                logger.debug(
                    "Matched %s %s -> %s", request.method, request.path, entry.route.path
                )
                return entry, params
        return None

    def _compile(self, route: Route) -> _CompiledRoute:
        action = self._resolver.resolve(route.handler)
        signature = route.signature or HandlerSignature.of(action)
        middleware = tuple(
            MiddlewareSpec(self._resolver.resolve(spec.function), spec.extra_args)
            for spec in route.middleware
        )
        return _CompiledRoute(
            route=route, action=action, signature=signature, middleware=middleware
        )
