"""Test greedy word wrapping."""

import pytest

from textdeck.text_wrap import wrap


def test_wraps_at_width():
    assert wrap("aaa bbb ccc", 7, len) == ["aaa bbb", "ccc"]


def test_exact_fit_is_not_wrapped():
    assert wrap("aaa bbb", 7, len) == ["aaa bbb"]


def test_collapses_whitespace_runs():
    assert wrap("  one \t two\n\nthree  ", 100, len) == ["one two three"]


def test_oversized_word_is_kept_whole():
    """A word wider than the line gets a line of its own instead of being split."""
    assert wrap("abcdefghij xy", 5, len) == ["abcdefghij", "xy"]
    assert wrap("xy abcdefghij", 5, len) == ["xy", "abcdefghij"]


def test_empty_text():
    assert wrap("", 10, len) == []
    assert wrap("   ", 10, len) == []


def test_uses_measure_function():
    """Width comes from the measurer, not from character count."""
    wide = {"W": 10}
    assert wrap("W W W", 25, lambda s: sum(wide.get(c, 1) for c in s)) == ["W W", "W"]


@pytest.mark.parametrize("text, width", [
    ("the quick brown fox jumps over the lazy dog", 12),
    ("one two three four five six seven eight nine ten", 9),
    ("supercalifragilistic is long", 6),
    ("سلام دنیا این یک متن آزمایشی است", 10),
])
def test_rewrapping_is_idempotent(text, width):
    lines = wrap(text, width, len)
    assert wrap(" ".join(lines), width, len) == lines
