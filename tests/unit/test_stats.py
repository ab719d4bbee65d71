"""Test word count, reading time and outline extraction."""

import pytest

from textdeck.layout_engine import LayoutEngine
from textdeck.stats import OutlineEntry, count_words, deck_stats, estimate_reading_time, extract_outline


def test_count_words():
    assert count_words("") == 0
    assert count_words("   \n ") == 0
    assert count_words("one two\nthree\tfour") == 4


@pytest.mark.parametrize("words, minutes", [(0, 0), (1, 1), (200, 1), (201, 2), (1000, 5)])
def test_reading_time_rounds_up(words, minutes):
    assert estimate_reading_time(" ".join(["w"] * words)) == minutes


def test_outline():
    text = "# Book\nintro\n## Part\n  ### Slide one  \n###no space\n> quote"
    assert extract_outline(text) == [
        OutlineEntry(1, "Book", "chapter"),
        OutlineEntry(2, "Part", "section"),
        OutlineEntry(3, "Slide one", "slide"),
    ]


def test_deck_stats(settings, measurer):
    text = "# Title\nsome words here"
    deck = LayoutEngine(measurer).build_deck(text, settings.replace(title_text="T"))

    stats = deck_stats(text, deck, has_images=True)

    assert stats.word_count == 5
    assert stats.reading_time == 1
    assert stats.slide_count == 2
    assert stats.has_title
    assert stats.has_images
    assert stats.outline == (OutlineEntry(1, "Title", "chapter"),)


def test_deck_stats_without_deck():
    stats = deck_stats("a b c")
    assert stats.slide_count == 0
    assert not stats.has_title
