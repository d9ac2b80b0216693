"""Signpost exception hierarchy.

Shared across the route registry, dispatcher, and middleware chain so
every module raises and catches the same types.
"""

from typing import Any


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when a route, registry, or dispatcher is configured wrongly.

    Always raised synchronously during registration, never while a
    request is being dispatched.
    """


class PatternError(ConfigurationError):
    """A path template placeholder could not be compiled.

    Raised when the route is built, so a broken template never reaches
    request handling.
    """

    def __init__(self, template: str, segment: str, reason: str) -> None:
        self.template = template
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid segment {segment!r} in path {template!r}: {reason}")


class MissingArgumentError(SignpostError):
    """A handler parameter had no value and no default.

    Only raised when the dispatcher runs with ``strict_arguments=True``.
    """

    def __init__(self, name: str, handler: Any) -> None:
        self.name = name
        self.handler = handler
        label = getattr(handler, "__qualname__", None) or type(handler).__name__
        super().__init__(f"No value for required parameter {name!r} of {label}")
