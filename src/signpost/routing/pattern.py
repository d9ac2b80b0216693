"""Path template compilation.

A template is a ``/``-separated string whose segments are either literal
text or placeholders::

    /users/{id}            any non-empty run of non-``/`` characters
    /users/{id:\\d+}        custom sub-pattern for the segment
    /files/{name:\\w+}.txt  literal text (placeholders must fill the segment)

Each template is compiled once into a whole-path anchored regex.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from signpost.errors import PatternError

DEFAULT_PARAM_PATTERN = r"[^/]+"

# Placeholders with this name are never captured; the segment is matched literally.
RESERVED_PARAM_NAME = "this"

_PARAM_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Rejected when unescaped in a sub-pattern, outside character classes
_FORBIDDEN_META = "^${}"


def _unescaped_meta(pattern: str) -> str | None:
    """Return the first unescaped anchor or brace outside a character class."""
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            i += 2
        elif c == "[":
            i += 1
            if i < n and pattern[i] == "^":
                i += 1
            if i < n and pattern[i] == "]":
                i += 1
            while i < n and pattern[i] != "]":
                i += 2 if pattern[i] == "\\" else 1
            i += 1
        elif c in _FORBIDDEN_META:
            return c
        else:
            i += 1
    return None


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Static:  ``users``        (is_param=False)
    Param:   ``{id}``         (is_param=True, param_name="id")
    Custom:  ``{id:\\d+}``     (is_param=True, param_name="id", pattern="\\d+")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    pattern: str = DEFAULT_PARAM_PATTERN

    def to_regex(self) -> str:
        if self.is_param:
            return f"(?P<{self.param_name}>{self.pattern})"
        return re.escape(self.value)


def parse_path(template: str) -> list[PathSegment]:
    """Split a path template into segments.

    Examples::

        "/users"           -> [PathSegment(""), PathSegment("users")]
        "/users/{id}"      -> [..., PathSegment("{id}", is_param=True, param_name="id")]
        "/users/{id:\\d+}" -> [..., PathSegment(..., pattern="\\d+")]

    Raises ``PatternError`` for a placeholder with an invalid name, or a
    sub-pattern that has an unescaped ``^``, ``$``, ``{`` or ``}`` or does
    not compile.
    """
    segments: list[PathSegment] = []
    for part in template.split("/"):
        if len(part) <= 2 or not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        name, _, pattern = part[1:-1].partition(":")
        if name == RESERVED_PARAM_NAME:
            segments.append(PathSegment(value=part))
            continue
        if not _PARAM_NAME.fullmatch(name):
            raise PatternError(template, part, f"{name!r} is not a valid parameter name")
        if pattern:
            meta = _unescaped_meta(pattern)
            if meta is not None:
                reason = f"sub-pattern may not contain unescaped {meta!r}"
                raise PatternError(template, part, reason)
            try:
                re.compile(pattern)
            except re.error as exc:
                raise PatternError(template, part, str(exc)) from exc

        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=name,
                pattern=pattern or DEFAULT_PARAM_PATTERN,
            )
        )
    return segments


@dataclass(frozen=True, slots=True)
class PathMatcher:
    """A compiled path template."""

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Match a decoded path against the whole template.

        Returns the captured parameters in template order, or ``None``.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {name: m.group(name) for name in self.param_names}


@lru_cache(maxsize=1024)
def compile_path(template: str) -> PathMatcher:
    """Compile a path template into a ``PathMatcher``.

    Results are cached, so routes copied with the same path share one
    compiled matcher.
    """
    segments = parse_path(template)
    source = "/".join(seg.to_regex() for seg in segments)
    try:
        regex = re.compile(source)
    except re.error as exc:
        # e.g. the same parameter name used twice
        raise PatternError(template, template, str(exc)) from exc
    names = tuple(seg.param_name for seg in segments if seg.is_param and seg.param_name)
    return PathMatcher(template=template, regex=regex, param_names=names)
