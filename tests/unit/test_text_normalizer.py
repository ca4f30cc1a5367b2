"""Unit tests for text normalization."""

import pytest

from blogsearch.domain.text import normalize_text


def test_collapses_whitespace_runs_within_line() -> None:
    assert normalize_text("hello \t  world") == "hello world"


def test_trims_lines_and_drops_blank_ones() -> None:
    text = "  first line  \n\n\n   \n\tsecond   line\t\n"
    assert normalize_text(text) == "first line\nsecond line"


def test_crlf_and_cr_line_breaks_become_newlines() -> None:
    assert normalize_text("one\r\ntwo\rthree") == "one\ntwo\nthree"


@pytest.mark.parametrize("value", ["", "   ", "\n\n\t", None, 42, b"bytes"])
def test_empty_or_non_string_yields_empty(value) -> None:
    assert normalize_text(value) == ""


def test_idempotent() -> None:
    text = "  A  title \n\n body   with   spaces \r\n end "
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_already_normalized_text_unchanged() -> None:
    assert normalize_text("Title\nBody text.") == "Title\nBody text."
