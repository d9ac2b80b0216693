"""Handler reference resolution — turns ``"module:attribute"`` strings into callables.

Routes, middleware entries, and the fallback may name their callable
instead of holding it. The dispatcher resolves every reference once,
while it freezes the registry, through a pluggable ``HandlerResolver``.
"""

import importlib
import inspect
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from signpost._internal.types import HandlerRef
from signpost.errors import ConfigurationError


class HandlerResolver(Protocol):
    """Maps a handler reference to a concrete callable."""

    def resolve(self, reference: HandlerRef) -> Callable[..., Any]: ...


def is_invokable_class(obj: Any) -> bool:
    """True if *obj* is a class whose instances are callable."""
    return inspect.isclass(obj) and any("__call__" in vars(k) for k in obj.__mro__)


def is_handler_ref(obj: Any) -> bool:
    """True if *obj* can name a handler: a callable, an invokable class, or a reference."""
    if inspect.isclass(obj):
        return is_invokable_class(obj)
    return callable(obj) or (isinstance(obj, str) and bool(obj))


def _instantiate(obj: Any, reference: HandlerRef) -> Callable[..., Any]:
    # Invokable classes are instantiated with no arguments
    if inspect.isclass(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Could not instantiate {reference!r}: {exc}"
            raise ConfigurationError(msg) from exc
    if not callable(obj):
        msg = f"{reference!r} resolved to {type(obj).__name__}, which is not callable"
        raise ConfigurationError(msg)
    return obj


class ImportResolver:
    """Resolve ``"package.module:attribute"`` references by importing them.

    Dotted attributes are followed (``"app.views:Users.list"``). A class
    is instantiated with no arguments, so invokable classes work as
    handlers and middleware. Results are cached per reference.

    Usage::

        resolver = ImportResolver()
        handler = resolver.resolve("myapp.views:index")
    """

    __slots__ = ("_cache",)

    def __init__(self) -> None:
        self._cache: dict[HandlerRef, Callable[..., Any]] = {}

    def resolve(self, reference: HandlerRef) -> Callable[..., Any]:
        if callable(reference) and not inspect.isclass(reference):
            return reference
        cached = self._cache.get(reference)
        if cached is not None:
            return cached
        if inspect.isclass(reference):
            resolved = self._cache[reference] = _instantiate(reference, reference)
            return resolved

        module_path, _, attr_path = reference.partition(":")
        if not module_path or not attr_path:
            msg = f"Handler reference {reference!r} must use the 'module:attribute' format"
            raise ConfigurationError(msg)

        try:
            obj: Any = importlib.import_module(module_path)
        except ImportError as exc:
            msg = f"Cannot import module {module_path!r} for {reference!r}"
            raise ConfigurationError(msg) from exc

        for attr in attr_path.split("."):
            try:
                obj = getattr(obj, attr)
            except AttributeError as exc:
                msg = f"{reference!r} has no attribute {attr!r}"
                raise ConfigurationError(msg) from exc

        resolved = _instantiate(obj, reference)
        self._cache[reference] = resolved
        return resolved


class MappingResolver:
    """Resolve references from an explicit name table.

    Values may be callables or classes (instantiated on first use)::

        resolver = MappingResolver({"users.list": list_users, "auth": AuthCheck})
    """

    __slots__ = ("_cache", "_entries")

    def __init__(self, entries: Mapping[str, Any]) -> None:
        self._entries = dict(entries)
        self._cache: dict[HandlerRef, Callable[..., Any]] = {}

    def resolve(self, reference: HandlerRef) -> Callable[..., Any]:
        if callable(reference) and not inspect.isclass(reference):
            return reference
        if reference in self._cache:
            return self._cache[reference]
        if inspect.isclass(reference):
            target = reference
        elif reference in self._entries:
            target = self._entries[reference]
        else:
            msg = f"Unknown handler reference {reference!r}"
            raise ConfigurationError(msg)
        resolved = _instantiate(target, reference)
        self._cache[reference] = resolved
        return resolved
