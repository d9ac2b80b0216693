"""Tests for signpost.routing.pattern — template parsing and compiled matchers."""

import pytest

from signpost.errors import ConfigurationError, PatternError
from signpost.routing.pattern import DEFAULT_PARAM_PATTERN, compile_path, parse_path


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert [s.value for s in segments] == ["", "users"]
        assert not any(s.is_param for s in segments)

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[2].is_param is True
        assert segments[2].param_name == "id"
        assert segments[2].pattern == DEFAULT_PARAM_PATTERN

    def test_custom_pattern(self) -> None:
        segments = parse_path(r"/users/{id:\d+}")
        assert segments[2].param_name == "id"
        assert segments[2].pattern == r"\d+"

    def test_empty_pattern_uses_default(self) -> None:
        segments = parse_path("/users/{id:}")
        assert segments[2].pattern == DEFAULT_PARAM_PATTERN

    def test_this_is_not_a_parameter(self) -> None:
        segments = parse_path("/objects/{this}")
        assert segments[2].is_param is False

    def test_partial_braces_are_literal(self) -> None:
        segments = parse_path("/files/{name}.txt")
        assert segments[2].is_param is False

    def test_rejects_invalid_name(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            parse_path("/users/{1id}")
        assert exc_info.value.segment == "{1id}"
        assert exc_info.value.template == "/users/{1id}"

    def test_rejects_broken_sub_pattern(self) -> None:
        with pytest.raises(PatternError):
            parse_path("/users/{id:(\\d+}")

    def test_pattern_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_path("/users/{id:[}")


class TestCompilePath:
    def test_literal_matches_itself_only(self) -> None:
        matcher = compile_path("/about/team")
        assert matcher.match("/about/team") == {}
        assert matcher.match("/about/teams") is None
        assert matcher.match("/about") is None
        assert matcher.match("/ABOUT/team") is None

    def test_literal_metacharacters_are_escaped(self) -> None:
        matcher = compile_path("/v1.0/items+")
        assert matcher.match("/v1.0/items+") == {}
        assert matcher.match("/v1x0/itemss") is None

    def test_param_captures_segment(self) -> None:
        matcher = compile_path("/some/{param}")
        assert matcher.match("/some/path") == {"param": "path"}

    def test_param_requires_non_empty_segment(self) -> None:
        assert compile_path("/some/{param}").match("/some/") is None

    def test_param_does_not_cross_separator(self) -> None:
        assert compile_path("/some/{param}").match("/some/a/b") is None

    def test_digit_pattern_rejects_letters(self) -> None:
        assert compile_path(r"/some/{param:\d+}").match("/some/path") is None
        assert compile_path(r"/some/{param:\d+}").match("/some/42") == {"param": "42"}

    def test_word_pattern_accepts_letters(self) -> None:
        assert compile_path(r"/some/{param:\w+}").match("/some/path") == {"param": "path"}

    def test_whole_path_anchored(self) -> None:
        matcher = compile_path("/users")
        assert matcher.match("/users/extra") is None
        assert matcher.match("/prefix/users") is None

    def test_params_in_template_order(self) -> None:
        matcher = compile_path("/{year}/{month}/{slug}")
        params = matcher.match("/2024/05/hello")
        assert list(params or {}) == ["year", "month", "slug"]
        assert matcher.param_names == ("year", "month", "slug")

    def test_this_matched_literally(self) -> None:
        matcher = compile_path("/objects/{this}")
        assert matcher.match("/objects/{this}") == {}
        assert matcher.match("/objects/42") is None

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(PatternError):
            compile_path("/{id}/{id}")

    def test_cached(self) -> None:
        assert compile_path("/cached/{x}") is compile_path("/cached/{x}")

    def test_root(self) -> None:
        matcher = compile_path("/")
        assert matcher.match("/") == {}
        assert matcher.match("") is None


class TestSubPatternMetacharacters:
    @pytest.mark.parametrize("segment", [r"{id:^\d+}", r"{id:\d+$}", r"{id:\d{2}}", "{id:a}b}"])
    def test_unescaped_anchor_or_brace_rejected(self, segment: str) -> None:
        with pytest.raises(PatternError) as exc_info:
            parse_path(f"/a/{segment}")
        assert "unescaped" in exc_info.value.reason

    def test_escaped_metacharacters_allowed(self) -> None:
        matcher = compile_path(r"/price/{amount:\$\d+}")
        assert matcher.match("/price/$12") == {"amount": "$12"}

    def test_negated_character_class_allowed(self) -> None:
        matcher = compile_path("/tags/{tag:[^-]+}")
        assert matcher.match("/tags/python") == {"tag": "python"}
        assert matcher.match("/tags/py-thon") is None

    def test_anchor_inside_character_class_allowed(self) -> None:
        matcher = compile_path("/cost/{value:[0-9$]+}")
        assert matcher.match("/cost/9$") == {"value": "9$"}
