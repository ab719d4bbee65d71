#!/usr/bin/env python3
"""
Test for pagination functionality - ensures classified lines are packed into
slides without exceeding the content-height budget.
"""

import pytest

from textdeck.classifier import classify
from textdeck.exceptions import InvalidInputError
from textdeck.layout_engine import LayoutEngine, page_height, paginate
from textdeck.models import Body, Deck, Heading, ListItem, Quote, Spacer
from textdeck.typography import line_height


def test_line_heights(settings):
    """30px font, 2x line height."""
    assert line_height(Heading("a", 1), settings) == pytest.approx(90)
    assert line_height(Heading("a", 2), settings) == pytest.approx(78)
    assert line_height(Heading("a", 3), settings) == pytest.approx(72)
    assert line_height(Quote("a"), settings) == pytest.approx(66)
    assert line_height(Spacer(), settings) == pytest.approx(15)
    assert line_height(Body("a"), settings) == pytest.approx(60)
    assert line_height(ListItem("a"), settings) == pytest.approx(60)


def test_unknown_line_kind_is_rejected(settings):
    with pytest.raises(TypeError):
        line_height("not a line", settings)


def test_empty_input_gives_empty_deck(settings):
    assert paginate([], settings) == Deck()


def test_pagination_splits_content(settings):
    """Budget is 1080 - 90 - 80 = 910; starting at 90, thirteen 60px lines fit."""
    assert settings.max_content_height == 910
    lines = [Body(f"line {i}") for i in range(20)]

    deck = paginate(lines, settings)

    assert [len(page) for page in deck] == [13, 7]
    assert [line for page in deck for line in page] == lines


def test_level_three_heading_forces_break(settings):
    lines = [Body("intro"), Spacer(), Heading("New slide", 3), Body("more"), Heading("Another", 3)]

    deck = paginate(lines, settings)

    assert len(deck) == 3
    assert deck[1].lines[0] == Heading("New slide", 3)
    assert deck[2].lines == (Heading("Another", 3),)


def test_leading_level_three_heading_does_not_create_empty_page(settings):
    deck = paginate([Heading("first", 3), Body("x")], settings)
    assert len(deck) == 1
    assert deck[0].lines[0] == Heading("first", 3)


def test_oversized_line_gets_its_own_page(settings):
    tall = settings.replace(line_height_multiplier=40)  # 1200px per body line
    deck = paginate([Body("a"), Body("b"), Spacer()], tall)

    assert [page.lines for page in deck] == [(Body("a"),), (Body("b"),), (Spacer(),)]
    for page in deck:
        assert len(page) >= 1


def test_pages_stay_within_budget(settings, measurer):
    text = "\n".join(
        [f"### Slide {i}\n> quote {i}\n" + " ".join(["lorem ipsum dolor"] * (i + 3)) for i in range(6)]
        + ["- " + " ".join(["item"] * 50) for _ in range(10)]
    )
    deck = paginate(classify(text, settings, measurer), settings)

    budget = settings.max_content_height - settings.padding
    for page in deck:
        if len(page) > 1:
            assert page_height(page, settings) <= budget + 1e-9
        assert not page.is_title


def test_every_level_three_heading_opens_its_page(settings, measurer):
    text = "\n".join(f"### Part {i}\n" + "text " * (30 * i) for i in range(1, 6))
    deck = paginate(classify(text, settings, measurer), settings)

    for page in deck:
        for i, line in enumerate(page):
            if isinstance(line, Heading) and line.level == 3:
                assert i == 0


def test_pagination_is_deterministic(settings, measurer):
    text = "# Title\n" + "\n".join(f"paragraph {i} " * 12 for i in range(25))
    first = paginate(classify(text, settings, measurer), settings)
    second = paginate(classify(text, settings, measurer), settings)
    assert first == second


def test_story_format_has_smaller_budget(settings):
    story = settings.replace(slide_format="story")
    # 1920 - 90 - 80 - 250 - 250
    assert story.max_content_height == 1250
    deck = paginate([Body(str(i)) for i in range(40)], story)
    assert len(deck[0]) == (1250 - 90) // 60


class TestLayoutEngine:
    """Deck assembly on top of classify + paginate."""

    def test_title_page_prepended(self, settings, measurer):
        engine = LayoutEngine(measurer)
        deck = engine.build_deck("hello", settings.replace(title_text="My deck"))
        assert deck.has_title
        assert deck[0].is_title and deck[0].lines == ()
        assert deck[1].lines[0] == Body("hello")

    def test_no_title_page_without_title(self, settings, measurer):
        deck = LayoutEngine(measurer).build_deck("hello", settings)
        assert not deck.has_title
        assert len(deck) == 1

    def test_title_only_deck(self, settings, measurer):
        deck = LayoutEngine(measurer).build_deck("   \n", settings.replace(title_text="Only"))
        assert len(deck) == 1
        assert deck[0].is_title

    def test_empty_text_and_title_is_invalid(self, settings, measurer):
        with pytest.raises(InvalidInputError):
            LayoutEngine(measurer).build_deck("", settings)
        with pytest.raises(ValueError):
            LayoutEngine(measurer).build_deck("  \n ", settings)

    def test_debug_logging(self, settings, measurer, caplog):
        import logging

        caplog.set_level(logging.DEBUG, logger="textdeck.layout_engine")
        LayoutEngine(measurer, debug=True).build_deck("a\nb", settings.replace(title_text="T"))
        assert "Layout engine created 2 pages" in caplog.text
