"""Tests for #| option line decoding and encoding."""

from __future__ import annotations

from peeky.parsing.options import (
    format_option_line,
    format_option_value,
    parse_option_lines,
    parse_option_value,
)


def test_parse_option_lines_types_values_by_shape() -> None:
    lines = [
        "#| viewerHeight: 500",
        "#| standalone: true",
        "#| components: [viewer,editor]",
        "#| layout: vertical",
    ]

    options = parse_option_lines(lines)

    assert options == {
        "viewerHeight": 500,
        "standalone": True,
        "components": ["viewer", "editor"],
        "layout": "vertical",
    }
    assert isinstance(options["viewerHeight"], int)
    assert options["standalone"] is True
    assert list(options) == ["viewerHeight", "standalone", "components", "layout"]


def test_parse_option_lines_skips_lines_without_separator() -> None:
    options = parse_option_lines(["#| just a comment", "  #| height: 300"])
    assert options == {"height": 300}


def test_parse_option_lines_splits_on_first_separator_only() -> None:
    options = parse_option_lines(["#| source: https://example.com/app"])
    assert options == {"source": "https://example.com/app"}


def test_parse_option_lines_last_duplicate_wins() -> None:
    options = parse_option_lines(["#| height: 1", "#| width: 2", "#| height: 3"])
    assert options == {"height": 3, "width": 2}
    assert list(options) == ["height", "width"]


def test_parse_option_value_boolean_is_case_sensitive() -> None:
    assert parse_option_value("false") is False
    assert parse_option_value("True") == "True"


def test_parse_option_value_trims_array_elements() -> None:
    assert parse_option_value("[ a ,b,  c ]") == ["a", "b", "c"]
    assert parse_option_value("[]") == []


def test_parse_option_value_keeps_non_integer_numbers_as_strings() -> None:
    assert parse_option_value("1.5") == "1.5"
    assert parse_option_value("-3") == "-3"


def test_parse_option_value_removes_one_pair_of_double_quotes() -> None:
    assert parse_option_value('"vertical"') == "vertical"
    assert parse_option_value('"500"') == "500"
    assert parse_option_value('["viewer", "editor"]') == ["viewer", "editor"]


def test_format_option_line_renders_each_type() -> None:
    assert format_option_line("standalone", True) == "#| standalone: true"
    assert format_option_line("height", 500) == "#| height: 500"
    assert format_option_line("layout", "vertical") == '#| layout: "vertical"'
    assert format_option_line("components", ["viewer", "editor"]) == (
        '#| components: ["viewer", "editor"]'
    )


def test_format_option_value_only_keeps_whole_floats_numeric() -> None:
    assert format_option_value(500.0) == "500"
    assert parse_option_value(format_option_value(2.5)) == "2.5"
