"""Tests for signpost.arguments — handler signatures and name-based resolution."""

import pytest

from signpost.arguments import (
    EMPTY,
    HandlerSignature,
    Parameter,
    call_with_arguments,
    resolve_arguments,
)
from signpost.errors import ConfigurationError, MissingArgumentError


def _show(request, user_id, page=1):
    return (request, user_id, page)


def _keyword(a, *, flag=False, label):
    return (a, flag, label)


def _variadic(a, *args, **kwargs):
    return (a, args, kwargs)


class _Invokable:
    def __call__(self, request, name="anon"):
        return (request, name)


class TestHandlerSignature:
    def test_of_function(self) -> None:
        sig = HandlerSignature.of(_show)
        assert sig.names == ("request", "user_id", "page")
        assert sig.parameters[2].default == 1
        assert sig.parameters[0].has_default is False

    def test_of_invokable_object(self) -> None:
        sig = HandlerSignature.of(_Invokable())
        assert sig.names == ("request", "name")

    def test_of_skips_variadics(self) -> None:
        assert HandlerSignature.of(_variadic).names == ("a",)

    def test_of_keyword_only(self) -> None:
        sig = HandlerSignature.of(_keyword)
        assert [p.keyword_only for p in sig.parameters] == [False, True, True]

    def test_of_lambda(self) -> None:
        assert HandlerSignature.of(lambda x, y=2: None).names == ("x", "y")

    def test_of_uninspectable(self) -> None:
        with pytest.raises(ConfigurationError):
            HandlerSignature.of(42)  # type: ignore[arg-type]

    def test_from_names(self) -> None:
        sig = HandlerSignature.from_names("request", "user_id", user_id=7, page=1)
        assert sig.parameters == (
            Parameter("request"),
            Parameter("user_id", 7),
            Parameter("page", 1),
        )

    def test_empty(self) -> None:
        assert HandlerSignature().names == ()


class TestResolveArguments:
    def test_order_follows_signature(self) -> None:
        sig = HandlerSignature.from_names("c", "a", "b")
        assert resolve_arguments(sig, {"a": 1, "b": 2, "c": 3}) == [3, 1, 2]

    def test_default_used_when_missing(self) -> None:
        sig = HandlerSignature.of(_show)
        assert resolve_arguments(sig, {"request": "r", "user_id": 5}) == ["r", 5, 1]

    def test_bag_beats_default(self) -> None:
        sig = HandlerSignature.of(_show)
        assert resolve_arguments(sig, {"page": 9}) == [None, None, 9]

    def test_missing_binds_none(self) -> None:
        sig = HandlerSignature.from_names("missing")
        assert resolve_arguments(sig, {}) == [None]

    def test_none_value_in_bag_kept(self) -> None:
        sig = HandlerSignature.from_names(page=1)
        assert resolve_arguments(sig, {"page": None}) == [None]

    def test_strict_raises(self) -> None:
        sig = HandlerSignature.from_names("user_id")
        with pytest.raises(MissingArgumentError) as exc_info:
            resolve_arguments(sig, {}, strict=True, handler=_show)
        assert exc_info.value.name == "user_id"
        assert "_show" in str(exc_info.value)

    def test_strict_allows_defaults(self) -> None:
        sig = HandlerSignature.of(_show)
        assert resolve_arguments(sig, {"request": 1, "user_id": 2}, strict=True) == [1, 2, 1]

    def test_extra_bag_entries_ignored(self) -> None:
        sig = HandlerSignature.from_names("a")
        assert resolve_arguments(sig, {"a": 1, "zzz": 2}) == [1]

    def test_default_sentinel(self) -> None:
        assert Parameter("x").default is EMPTY


class TestCallWithArguments:
    def test_positional(self) -> None:
        result = call_with_arguments(_show, HandlerSignature.of(_show), {"user_id": 3})
        assert result == (None, 3, 1)

    def test_keyword_only(self) -> None:
        result = call_with_arguments(
            _keyword, HandlerSignature.of(_keyword), {"a": 1, "label": "x"}
        )
        assert result == (1, False, "x")

    def test_explicit_signature_overrides_introspection(self) -> None:
        def handler(*args):
            return args

        sig = HandlerSignature.from_names("b", "a")
        assert call_with_arguments(handler, sig, {"a": 1, "b": 2}) == (2, 1)

    def test_strict_missing(self) -> None:
        with pytest.raises(MissingArgumentError):
            call_with_arguments(_show, HandlerSignature.of(_show), {}, strict=True)
