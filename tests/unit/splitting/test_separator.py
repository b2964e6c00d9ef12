"""Unit tests for separator rendering and parsing."""

import pytest

from tweetstorm.splitter import (
    SEPARATOR_PATTERN,
    format_ordinal_tag,
    ordinal_tag_length,
    parse_indicator,
    render_closing_separator,
    render_indicator,
    render_separator,
    strip_separators,
)
from tweetstorm.splitter.separator import contains_separator, strip_ordinal_tag


class TestRendering:
    """Tests for separator and tag rendering."""

    @pytest.mark.unit
    def test_render_separator_exact_format(self) -> None:
        assert render_separator(12, 280) == "\n\n<!-- ↓ [[[ 12 / 280 ]]] -->\n\n"

    @pytest.mark.unit
    def test_render_indicator_with_up_glyph(self) -> None:
        assert render_indicator(0, 140, "↑") == "<!-- ↑ [[[ 0 / 140 ]]] -->"

    @pytest.mark.unit
    def test_render_closing_separator(self) -> None:
        assert render_closing_separator(280) == "\n\n<!-- ↑ [[[ 0 / 280 ]]] -->\n\n"

    @pytest.mark.unit
    def test_format_ordinal_tag(self) -> None:
        assert format_ordinal_tag(2, 3) == " (2/3)"
        assert format_ordinal_tag(10, 12) == " (10/12)"

    @pytest.mark.unit
    @pytest.mark.parametrize(("total", "expected"), [(1, 0), (2, 6), (9, 6), (10, 8), (99, 8), (100, 10)])
    def test_ordinal_tag_length(self, total: int, expected: int) -> None:
        assert ordinal_tag_length(total) == expected

    @pytest.mark.unit
    def test_rendered_separator_matches_pattern(self) -> None:
        match = SEPARATOR_PATTERN.search(render_separator(271, 280))
        assert match is not None
        assert match.groups() == ("↓", "271", "280")


class TestParsing:
    """Tests for parse_indicator and pattern strictness."""

    @pytest.mark.unit
    def test_parse_indicator(self) -> None:
        assert parse_indicator("<!-- ↑ [[[ 3 / 140 ]]] -->") == ("↑", 3, 140)

    @pytest.mark.unit
    def test_parse_tolerates_surrounding_blank_lines(self) -> None:
        assert parse_indicator(render_separator(5, 280)) == ("↓", 5, 280)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "<!-- ↓ [[[ 012 / 280 ]]] -->",
            "<!-- → [[[ 12 / 280 ]]] -->",
            "<!-- ↓ [[ 12 / 280 ]] -->",
            "<!-- ↓ [[[ -1 / 280 ]]] -->",
            "not a separator",
        ],
    )
    def test_rejects_malformed(self, text: str) -> None:
        assert parse_indicator(text) is None

    @pytest.mark.unit
    def test_contains_separator(self) -> None:
        assert contains_separator("abc" + render_separator(0, 280) + "def")
        assert not contains_separator("<!-- plain comment -->")


class TestStripping:
    """Tests for recovering prose from a split document."""

    @pytest.mark.unit
    def test_strip_ordinal_tag(self) -> None:
        assert strip_ordinal_tag("Hello there. (2/3)") == "Hello there."
        assert strip_ordinal_tag("Hello there.") == "Hello there."

    @pytest.mark.unit
    def test_strip_separators(self, build_thread) -> None:
        text = build_thread(["First part. (1/2)", "Second part. (2/2)"])
        assert strip_separators(text) == "First part. Second part."

    @pytest.mark.unit
    def test_strip_separators_keeps_surrounding_text(self, build_thread) -> None:
        text = "Intro." + build_thread(["Body."]) + "Outro."
        assert strip_separators(text) == "Intro. Body. Outro."

    @pytest.mark.unit
    def test_strip_separators_without_separators(self) -> None:
        assert strip_separators("  plain text  ") == "plain text"
