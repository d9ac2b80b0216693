"""Name-based argument resolution for handlers.

A handler declares what it wants by naming its parameters::

    def show_user(request, user_id, db, page=1): ...

At dispatch the router builds an argument bag (defaults, run-time
arguments, route attributes, path parameters, and the reserved
``request``/``route``/``parameters`` bindings) and fills each parameter
from it by name. A name missing from the bag falls back to the
parameter's default, then to ``None``, or raises when strict
resolution is on.

Signatures are plain data. They can be declared explicitly with
``HandlerSignature.from_names`` or read once from the function with
``HandlerSignature.of``; either way resolution itself is a pure
function over ``(signature, bag)``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from signpost.errors import ConfigurationError, MissingArgumentError

EMPTY = inspect.Parameter.empty

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class Parameter:
    """One named handler parameter."""

    name: str
    default: Any = EMPTY
    keyword_only: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not EMPTY


@dataclass(frozen=True, slots=True)
class HandlerSignature:
    """Ordered parameter names (and defaults) of a handler."""

    parameters: tuple[Parameter, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    @classmethod
    def from_names(cls, *names: str, **defaults: Any) -> HandlerSignature:
        """Declare a signature explicitly.

        ``HandlerSignature.from_names("request", "user_id", page=1)``
        describes ``(request, user_id, page=1)``. Defaults for names not
        listed are appended in keyword order.
        """
        params = [Parameter(name, defaults.pop(name, EMPTY)) for name in names]
        params.extend(Parameter(name, value) for name, value in defaults.items())
        return cls(tuple(params))

    @classmethod
    def of(cls, func: Callable[..., Any]) -> HandlerSignature:
        """Read the signature of *func* by introspection.

        ``*args`` and ``**kwargs`` are never bound. Raises
        ``ConfigurationError`` if *func* has no inspectable signature.
        """
        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError) as exc:
            msg = f"Cannot read the signature of {func!r}: {exc}"
            raise ConfigurationError(msg) from exc

        return cls(
            tuple(
                Parameter(
                    name=name,
                    default=param.default,
                    keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
                )
                for name, param in sig.parameters.items()
                if param.kind not in _SKIPPED_KINDS
            )
        )


def resolve_arguments(
    signature: HandlerSignature,
    bag: Mapping[str, Any],
    *,
    strict: bool = False,
    handler: Any = None,
) -> list[Any]:
    """Return one value per parameter of *signature*, in declaration order.

    Lookup order for each name: the bag, the parameter's default, then
    ``None``. With ``strict=True`` a parameter that has neither a bag
    entry nor a default raises ``MissingArgumentError`` instead.
    """
    values: list[Any] = []
    for param in signature.parameters:
        if param.name in bag:
            values.append(bag[param.name])
        elif param.has_default:
            values.append(param.default)
        elif strict:
            raise MissingArgumentError(param.name, handler)
        else:
            values.append(None)
    return values


def call_with_arguments(
    func: Callable[..., Any],
    signature: HandlerSignature,
    bag: Mapping[str, Any],
    *,
    strict: bool = False,
) -> Any:
    """Resolve arguments for *func* from *bag* and call it."""
    values = resolve_arguments(signature, bag, strict=strict, handler=func)
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for param, value in zip(signature.parameters, values, strict=True):
        if param.keyword_only:
            kwargs[param.name] = value
        else:
            args.append(value)
    return func(*args, **kwargs)
