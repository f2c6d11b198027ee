"""Tests for the whitespace / paragraph normalizer."""

from __future__ import annotations

import pytest

from novelcrawl.scraper.normalizer import normalize


class TestNormalize:
    def test_three_breaks_collapse_to_one_paragraph_break(self) -> None:
        assert normalize("A\n\n\nB") == "A\n\nB"

    def test_whitespace_inside_line_collapses(self) -> None:
        assert normalize("  A   B  ") == "A B"

    def test_consecutive_lines_stay_single_spaced(self) -> None:
        assert normalize("A\nB") == "A\nB"

    def test_blank_lines_with_spaces_count_as_empty(self) -> None:
        assert normalize("A\n   \n\t\nB") == "A\n\nB"

    def test_windows_and_old_mac_line_endings(self) -> None:
        assert normalize("A\r\n\r\nB\rC") == "A\n\nB\nC"

    def test_nbsp_tabs_and_ideographic_spaces(self) -> None:
        assert normalize("　　第一章\xa0\t開始") == "第一章 開始"

    def test_empty_and_blank_input(self) -> None:
        assert normalize("") == ""
        assert normalize("  \n\n \t ") == ""

    def test_leading_and_trailing_breaks_trimmed(self) -> None:
        assert normalize("\n\n\nHello\n\n\n") == "Hello"

    @pytest.mark.parametrize(
        "raw",
        [
            "A\n\n\nB",
            "  A   B  ",
            " x \r\n\r\n\r\n y\n z ",
            "　　段落一\n\n\n\n　　段落二",
            "\n \n \n",
            "one\ntwo\n\nthree\n\n\n\nfour",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize(raw)
        assert normalize(once) == once
