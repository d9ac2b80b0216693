"""Tests for signpost.__init__ — lazy imports cover all public names."""

import pytest

import signpost


@pytest.mark.parametrize("name", signpost.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(signpost, name)
    assert obj is not None, f"signpost.{name} resolved to None"


def test_unknown_name_raises() -> None:
    with pytest.raises(AttributeError):
        signpost.does_not_exist  # noqa: B018


def test_quickstart() -> None:
    """The usage example in the package docstring works as written."""
    registry = signpost.RouteRegistry()

    @registry.route("/hello/{name}", methods=["GET"])
    def hello(name):
        return f"Hello, {name}!"

    dispatcher = signpost.Dispatcher(registry)
    assert dispatcher.run(signpost.Request("GET", "/hello/world")) == "Hello, world!"
