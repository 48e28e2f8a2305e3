"""
Tests for the human readable renderer.
"""

from dataclasses import dataclass

import pytest

from logtree.core.exceptions.custom_exceptions import RenderError
from logtree.encoding.encoder import encode_fields
from logtree.rendering.human_renderer import (
    format_float,
    quote,
    quote_key,
    render,
    unquote_key,
)
from logtree.value.fields import F, M
from logtree.value.model import (
    NULL,
    Field,
    Float64,
    Int64,
    List,
    Map,
    String,
    Uint64,
)


@dataclass
class Empty:
    pass


def render_fields(*fields):
    return render(encode_fields(M(*fields)))


class TestRender:
    """Test cases for render."""

    def test_string_with_newlines(self):
        assert render_fields(F("a", "hi\ntwo\nthree")) == "a: hi\n  two\n  three"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (False, "a: false"),
            (0.3, "a: 0.3"),
            (-1, "a: -1"),
            (None, "a: null"),
        ],
    )
    def test_scalars(self, value, expected):
        assert render_fields(F("a", value)) == expected

    def test_uint(self):
        assert render(Map((Field("a", Uint64(3)),))) == "a: 3"

    def test_list(self):
        out = render_fields(
            F(
                "a",
                [M(F("hi", "hello"), F("hi3", "hello")), "3", ["a", "b", "c"]],
            )
        )
        assert out == (
            "a:\n"
            "  - hi: hello\n"
            "    hi3: hello\n"
            "  - 3\n"
            "  -\n"
            "    - a\n"
            "    - b\n"
            "    - c"
        )

    def test_empty_struct(self):
        """Test empty maps under a map leave only their key."""
        out = render_fields(F("a", Empty()), F("b", Empty()), F("c", Empty()))
        assert out == "a:\nb:\nc:"

    def test_nested_map(self):
        out = render_fields(F("a", {"1": "hi", "0": "hi"}))
        assert out == "a:\n  0: hi\n  1: hi"

    def test_special_character_keys(self):
        out = render_fields(
            F("nhooyr \tsoftware™️", "hi"),
            F("\rxeow\r", "mdsla\ndsamkld"),
        )
        assert out == '"nhooyr_\\tsoftware™️": hi\n"\\rxeow\\r": mdsla\n  dsamkld'

    def test_svc_example(self):
        m = Map((Field("name", String("svc")), Field("retries", Int64(3))))
        assert render(m) == "name: svc\nretries: 3"

    def test_no_trailing_newline(self):
        assert not render_fields(F("a", {"b": [1, 2]})).endswith("\n")

    def test_top_level_list(self):
        """Test list elements always start on a new line."""
        assert render(List((Int64(1), String("x")))) == "\n- 1\n- x"

    def test_multiline_string_in_list(self):
        m = Map((Field("a", List((String("one\ntwo"),))),))
        assert render(m) == "a:\n  - one\n    two"

    def test_non_value_raises(self):
        with pytest.raises(RenderError):
            render(Map((Field("a", "raw"),)))


class TestFormatFloat:
    """Test cases for float formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.3, "0.3"),
            (2.5, "2.5"),
            (-1.25, "-1.25"),
            (1e-07, "0.0000001"),
            (1e16, "10000000000000000"),
            (float("inf"), "inf"),
            (float("-inf"), "-inf"),
            (float("nan"), "nan"),
        ],
    )
    def test_format(self, value, expected):
        assert format_float(value) == expected

    def test_round_trip(self):
        for f in (0.1, 1 / 3, 123456.789, 5e-324):
            assert float(format_float(f)) == f

    def test_rendered(self):
        assert render(Map((Field("ratio", Float64(0.5)),))) == "ratio: 0.5"


class TestQuote:
    """Test cases for key quoting."""

    def test_bare_when_unchanged(self):
        assert quote("simple_key") == "simple_key"
        assert quote("a.b-c") == "a.b-c"

    def test_empty(self):
        assert quote("") == '""'

    def test_escapes(self):
        assert quote('a"b') == '"a\\"b"'
        assert quote("a\\b") == '"a\\\\b"'
        assert quote("\x00") == '"\\u0000"'
        assert quote("\u200b") == '"\\u200b"'

    def test_quote_key_replaces_spaces(self):
        assert quote_key("user id") == "user_id"
        assert quote_key("") == '""'

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "plain",
            "with space",
            "tab\there",
            'quote"inside',
            "back\\slash",
            "\r\n",
            "\x07bell",
            "zero\u200bwidth",
            "emoji😀",
            "tag\U000e0001",
            "™️",
        ],
    )
    def test_round_trip(self, key):
        assert unquote_key(quote(key)) == key

    def test_null_literal(self):
        assert render(NULL) == "null"
