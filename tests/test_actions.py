"""Tests for the escape/unescape/format editor actions."""

import json

import pytest

from jsonpeel.actions import (
    char_status,
    escape_once,
    format_document,
    format_value,
    minify_document,
    unescape_step,
)
from jsonpeel.errors import DepthExhaustedError, JsonSyntaxError
from jsonpeel.normalize import normalize


class TestMinifyDocument:
    """Whitespace removal."""

    def test_minifies(self):
        assert minify_document('{\n  "a": 1,\n  "b": [1, 2]\n}') == '{"a":1,"b":[1,2]}'

    def test_keeps_key_order_and_unicode(self):
        assert minify_document(' { "b": "한글", "a": null } ') == '{"b":"한글","a":null}'

    def test_string_document(self):
        assert minify_document(' "x y" ') == '"x y"'

    def test_empty(self):
        assert minify_document(" \n ") == ""

    def test_invalid(self):
        with pytest.raises(JsonSyntaxError):
            minify_document("[1,")


class TestEscapeOnce:
    """Adding an escape layer."""

    def test_minifies_and_quotes(self):
        assert escape_once('{\n  "a": 1,\n  "b": [1, 2]\n}') == '"{\\"a\\":1,\\"b\\":[1,2]}"'

    def test_adds_one_layer(self):
        text = escape_once('{"a": 1}')
        outcome = normalize(text)
        assert outcome.value == {"a": 1}
        assert outcome.escape_depth == 1

    def test_escaping_twice(self):
        text = escape_once(escape_once("[1]"))
        assert normalize(text).escape_depth == 2

    def test_keeps_unicode(self):
        assert "한글" in escape_once('{"k": "한글"}')

    def test_empty(self):
        assert escape_once("   ") == ""

    def test_invalid(self):
        with pytest.raises(JsonSyntaxError):
            escape_once("{oops")


class TestUnescapeStep:
    """Stepping down one layer, pretty-printing when plain JSON remains."""

    def test_to_plain_json_pretty_prints(self):
        assert unescape_step('"{\\"a\\":1}"') == '{\n  "a": 1\n}'

    def test_custom_indent(self):
        assert unescape_step('{\\"a\\":[1]}', indent=4) == '{\n    "a": [\n        1\n    ]\n}'

    def test_still_escaped_left_as_is(self):
        three = json.dumps(json.dumps(json.dumps({"a": 1})))
        two = json.dumps(json.dumps({"a": 1}))
        assert unescape_step(three) == two

    def test_plain_text_unchanged(self):
        assert unescape_step('  Hello "World"  ') == 'Hello "World"'

    def test_empty(self):
        assert unescape_step("") == ""


class TestFormatDocument:
    """Copy-output formatting."""

    def test_unwraps_then_formats(self):
        text = json.dumps(json.dumps({"a": [1, 2]}))
        assert format_document(text) == '{\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_preserves_key_order(self):
        result = format_document('{"b": 1, "a": 2}')
        assert result.index('"b"') < result.index('"a"')

    def test_invalid(self):
        with pytest.raises(DepthExhaustedError):
            format_document("not json")

    def test_format_value_scalar(self):
        assert format_value("x") == '"x"'


class TestCharStatus:
    """Input length label."""

    @pytest.mark.parametrize("text,expected", [
        ("", "0 chars"),
        ("a", "1 char"),
        ("ab", "2 chars"),
        ("한", "1 char"),
    ])
    def test_label(self, text, expected):
        assert char_status(text) == expected
