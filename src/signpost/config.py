"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from signpost._internal.resolve import is_handler_ref
from signpost._internal.types import HandlerRef
from signpost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(arguments={"db": db}, fallback=not_found)
    """

    # Default arguments offered to every handler (lowest precedence)
    arguments: Mapping[str, Any] = field(default_factory=dict)

    # Action invoked when no route matches
    fallback: HandlerRef | None = None

    # Prefix applied to routes registered through a registry built from this config
    prefix: str = ""

    # Raise MissingArgumentError instead of binding None for required parameters
    strict_arguments: bool = False

    # Percent-decode the request path before matching
    decode_path: bool = True

    def __post_init__(self) -> None:
        fallback = self.fallback
        if fallback is not None and not is_handler_ref(fallback):
            msg = (
                "Fallback must be a callable, an invokable class, "
                "or a 'module:attribute' reference, "
                f"got {type(fallback).__name__}"
            )
            raise ConfigurationError(msg)
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))
