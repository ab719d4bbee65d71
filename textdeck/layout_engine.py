#!/usr/bin/env python3
"""Layout engine: classification, pagination and deck assembly."""

import logging
from typing import List, Optional, Sequence

from .classifier import classify
from .config import Settings
from .exceptions import InvalidInputError
from .measure import Measurer
from .models import ClassifiedLine, Deck, Page, is_slide_break
from .typography import line_height

logger = logging.getLogger(__name__)


def paginate(lines: Sequence[ClassifiedLine], settings: Settings) -> Deck:
    """
    Greedily pack classified lines into slides.

    A level-3 heading always opens a new slide. Otherwise a line moves to a
    new slide when it would push the cursor past
    ``settings.max_content_height``; a line taller than a whole slide is
    still placed, alone, rather than split.

    Args:
        lines: Classified lines in reading order
        settings: Slide settings (font size, padding, line height, format)

    Returns:
        Deck of content pages (no title page)
    """
    pages: List[Page] = []
    current_page: List[ClassifiedLine] = []
    max_height = settings.max_content_height
    cursor = settings.padding

    def flush():
        if current_page:
            pages.append(Page(lines=tuple(current_page)))

    for line in lines:
        height = line_height(line, settings)

        if is_slide_break(line):
            flush()
            current_page = [line]
            cursor = settings.padding + height
            continue

        if cursor + height > max_height and current_page:
            flush()
            current_page = [line]
            cursor = settings.padding + height
        else:
            current_page.append(line)
            cursor += height

    flush()

    return Deck(pages=tuple(pages))


def page_height(page: Page, settings: Settings) -> float:
    """Summed height of every line on *page*."""
    return sum(line_height(line, settings) for line in page.lines)


class LayoutEngine:
    """
    Turns markdown-like text into a paginated :class:`~textdeck.models.Deck`.
    """

    def __init__(self, measurer: Measurer, *, debug: bool = False):
        """
        Args:
            measurer: Text measurer used for word wrapping
            debug: Whether to log per-page details
        """
        self.measurer = measurer
        self.debug = debug

    def classify(self, text: str, settings: Settings) -> List[ClassifiedLine]:
        return classify(text, settings, self.measurer)

    def paginate(self, text: str, settings: Settings) -> Deck:
        """Classify and paginate *text*; no title page is added."""
        if not text or not text.strip():
            return Deck()
        return paginate(self.classify(text, settings), settings)

    def build_deck(self, text: str, settings: Settings) -> Deck:
        """
        Build the full deck, prefixed by a title page when the settings
        carry a title.

        Raises:
            InvalidInputError: If there is neither body text nor a title
        """
        has_text = bool(text and text.strip())
        if not has_text and not settings.title_text:
            raise InvalidInputError("Enter a title or some text to build slides from")

        deck = self.paginate(text, settings)
        if settings.title_text:
            deck = deck.with_title_page()

        if self.debug:
            logger.debug(f"Layout engine created {len(deck)} pages "
                         f"(content height limit: {settings.max_content_height:g}px)")
            for i, page in enumerate(deck):
                if page.is_title:
                    logger.debug(f"  Page {i + 1}: title")
                    continue
                logger.debug(f"  Page {i + 1}: {len(page)} lines ({page_height(page, settings):g}px)")

        return deck
