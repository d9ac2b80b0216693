"""Shared type aliases used across signpost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user-defined function with variable signature
Handler: TypeAlias = Callable[..., Any]

# A handler given directly or by reference ("package.module:attribute")
HandlerRef: TypeAlias = Handler | str
