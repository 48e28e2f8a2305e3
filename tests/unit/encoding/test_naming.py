"""
Tests for output name derivation.
"""

import pytest

from logtree.encoding.naming import snakecase, split_camel


class TestSnakecase:
    """Test cases for snakecase."""

    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("meowBar", "meow_bar"),
            ("MeowBar", "meow_bar"),
            ("MEOWBar", "meow_bar"),
            ("Meow123BAR", "meow_123_bar"),
            ("BöseÜberraschung", "böse_überraschung"),
            ("GL11Version", "gl_11_version"),
            ("SimpleXMLParser", "simple_xml_parser"),
            ("PDFLoader", "pdf_loader"),
            ("HTML", "html"),
        ],
    )
    def test_camel_case(self, identifier, expected):
        assert snakecase(identifier) == expected

    def test_snake_case_unchanged(self):
        """Test identifiers that are already snake_case come back as is."""
        assert snakecase("retry_count") == "retry_count"
        assert snakecase("host") == "host"

    def test_leading_underscores_dropped(self):
        assert snakecase("_retries") == "retries"
        assert snakecase("__private_thing") == "private_thing"


class TestSplitCamel:
    """Test cases for split_camel."""

    def test_split(self):
        assert split_camel("myFieldName") == ["my", "Field", "Name"]
        assert split_camel("PDFLoader") == ["PDF", "Loader"]
        assert split_camel("") == []
