"""Tests for long message splitting."""

from __future__ import annotations

import pytest

from groupme_api.messaging import split_message


def test_short_text_unchanged():
    assert split_message("hello\nworld", "\n", 1000) == ["hello\nworld"]
    assert split_message("abcd", "\n", 4) == ["abcd"]


def test_packs_tokens_below_limit():
    parts = split_message("a\nb\nc", "\n", 4)

    assert parts == ["a\n", "b\n", "c\n"]
    assert "".join(parts) == "a\nb\nc\n"


def test_greedy_packing():
    parts = split_message("aa bb cc dd", " ", 7)

    assert parts == ["aa bb ", "cc dd "]
    assert all(len(part) < 7 for part in parts)


def test_oversized_token_kept_whole():
    parts = split_message("tiny\n" + "x" * 12 + "\nend", "\n", 8)

    assert parts == ["tiny\n", "x" * 12 + "\n", "end\n"]


def test_no_empty_first_segment():
    parts = split_message("x" * 10 + "\ny", "\n", 5)

    assert parts[0] == "x" * 10 + "\n"
    assert "" not in parts


def test_empty_delimiter_rejected():
    with pytest.raises(ValueError):
        split_message("x" * 20, "", 5)
