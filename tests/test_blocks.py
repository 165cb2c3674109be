"""Tests for split_blocks."""

import pytest

from chat_reveal.core.blocks import split_blocks


def test_empty():
    assert split_blocks("") == []
    assert split_blocks("   \n\n  ") == []


def test_single_paragraph():
    assert split_blocks("just one\nparagraph") == ["just one\nparagraph"]


def test_splits_on_blank_lines():
    assert split_blocks("a\n\nb\n   \nc") == ["a", "b", "c"]


def test_multiple_blank_lines_collapse():
    assert split_blocks("a\n\n\n\nb") == ["a", "b"]


def test_overflow_joins_into_last_block():
    assert split_blocks("1\n\n2\n\n3\n\n4", max_blocks=2) == ["1", "2\n\n3\n\n4"]


def test_short_blocks_merge_into_previous():
    text = "A long enough opening.\n\nok\n\nAnother long paragraph."
    assert split_blocks(text, min_block_chars=5) == [
        "A long enough opening.\n\nok",
        "Another long paragraph.",
    ]


def test_short_first_block_is_kept():
    assert split_blocks("hi\n\nthere friend", min_block_chars=5) == ["hi", "there friend"]


def test_invalid_max_blocks():
    with pytest.raises(ValueError):
        split_blocks("x", max_blocks=0)
