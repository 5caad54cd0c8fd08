"""Testy parsera nagłówków (md_parser.section_patterns)."""

from __future__ import annotations

import pytest

from md_parser.section_patterns import arity_matches, parse_heading, split_numeral


def test_numbered_heading():
    parsed = parse_heading("### 11.2.3 Using Async/Await")
    assert parsed is not None
    assert parsed.numeric_path == (11, 2, 3)
    assert parsed.title == "Using Async/Await"
    assert parsed.depth == 3
    assert parsed.arity_ok


def test_unnumbered_heading():
    parsed = parse_heading("## Overview")
    assert parsed.numeric_path is None
    assert parsed.title == "Overview"
    assert parsed.depth == 2


def test_top_level_single_number():
    parsed = parse_heading("# 9 Swift Advanced")
    assert parsed.numeric_path == (9,)
    assert parsed.title == "Swift Advanced"
    assert parsed.depth == 1
    assert parsed.arity_ok


@pytest.mark.parametrize("line, path, title", [
    ("## 3. Installation", (3,), "Installation"),
    ("## 12.7", (12, 7), ""),
    ("## 4.1) Setup", (4, 1), "Setup"),
    ("## 2.1 Title ##", (2, 1), "Title"),
    ("   ## 5.2 Indented", (5, 2), "Indented"),
])
def test_numeral_variants(line, path, title):
    parsed = parse_heading(line)
    assert parsed.numeric_path == path
    assert parsed.title == title


@pytest.mark.parametrize("line", [
    "plain text",
    "#hashtag",
    "    # indented code",
    "####### too deep",
    "",
])
def test_not_a_heading(line):
    assert parse_heading(line) is None


def test_number_glued_to_word_is_title():
    parsed = parse_heading("## 3D Touch")
    assert parsed.numeric_path is None
    assert parsed.title == "3D Touch"


def test_arity_tolerance_loose_and_strict():
    # "## 1 Intro": długość 1, głębokość 2
    assert parse_heading("## 1 Intro").arity_ok
    assert not parse_heading("## 1 Intro", strict=True).arity_ok
    # "# 1.2.3 Deep": długość 3, głębokość 1 — poza tolerancją
    assert not parse_heading("# 1.2.3 Deep").arity_ok


def test_arity_matches():
    assert arity_matches((1, 2), 2, strict=True)
    assert arity_matches((1, 2), 3)
    assert not arity_matches((1, 2), 4)


def test_split_numeral_without_number():
    assert split_numeral("Conclusion") == (None, "Conclusion")


def test_overlong_numeral_is_title_text():
    digits = "9" * 5000
    parsed = parse_heading(f"# {digits} Title")
    assert parsed.numeric_path is None
    assert parsed.title == f"{digits} Title"


def test_nine_digit_components_still_parse():
    assert parse_heading("## 123456789.1 Big").numeric_path == (123456789, 1)
