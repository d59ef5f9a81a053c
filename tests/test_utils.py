"""Tests for text helpers and logging utilities."""

import logging

import pytest

from sideways.utils import escape_html, get_logger, rtrim, span_length, starts_with_ignore_case, trim


class TestEscapeHtml:
    def test_escapes_specials(self) -> None:
        assert escape_html("<a href=\"x\">it's & more</a>") == (
            "&lt;a href=&quot;x&quot;&gt;it&#039;s &amp; more&lt;/a&gt;"
        )

    def test_allow_quotes(self) -> None:
        assert escape_html("\"q\" 'q' <", allow_quotes=True) == "\"q\" 'q' &lt;"

    def test_empty(self) -> None:
        assert escape_html("") == ""

    def test_entities_double_escaped(self) -> None:
        assert escape_html("&amp;") == "&amp;amp;"

    def test_unicode_untouched(self) -> None:
        assert escape_html("héllo ☃") == "héllo ☃"


class TestTrimHelpers:
    def test_trim_ascii_whitespace(self) -> None:
        assert trim(" \t\n\r\0\x0bx \t") == "x"

    def test_unicode_spaces_kept(self) -> None:
        assert trim("\u00a0x\u00a0") == "\u00a0x\u00a0"

    def test_trim_custom_chars(self) -> None:
        assert trim("|a|b|", "|") == "a|b"

    def test_rtrim(self) -> None:
        assert rtrim("  x  ") == "  x"
        assert rtrim("---:", "-:") == ""

    @pytest.mark.parametrize(
        ("text", "chars", "start", "expected"),
        [
            ("###  Title", "#", 0, 3),
            ("    code", " ", 0, 4),
            ("abc", "x", 0, 0),
            ("", "x", 0, 0),
            ("a```b", "`", 1, 3),
        ],
    )
    def test_span_length(self, text: str, chars: str, start: int, expected: int) -> None:
        assert span_length(text, chars, start) == expected

    def test_starts_with_ignore_case(self) -> None:
        assert starts_with_ignore_case("HTTPS://x", "https://")
        assert not starts_with_ignore_case("http", "https://")
        assert starts_with_ignore_case("anything", "")


class TestGetLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("readme").name == "sideways.readme"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("sideways.engine").name == "sideways.engine"
        assert get_logger("sideways").name == "sideways"

    def test_similar_prefix_still_namespaced(self) -> None:
        assert get_logger("sidewayser").name == "sideways.sidewayser"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)

    def test_render_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        from sideways import render

        with caplog.at_level(logging.DEBUG, logger="sideways"):
            render("# hi")
        assert any(record.name == "sideways.engine" for record in caplog.records)
