"""Word count, reading time and heading outline for source text."""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import WORDS_PER_MINUTE
from .models import Deck

OUTLINE_KINDS = {1: "chapter", 2: "section", 3: "slide"}


@dataclass(frozen=True)
class OutlineEntry:
    level: int
    text: str
    kind: str


@dataclass(frozen=True)
class DeckStats:
    word_count: int
    reading_time: int
    outline: Tuple[OutlineEntry, ...]
    slide_count: int = 0
    has_title: bool = False
    has_images: bool = False


def count_words(text: str) -> int:
    return len(text.split())


def estimate_reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Reading time in whole minutes, rounded up."""
    return math.ceil(count_words(text) / words_per_minute)


def extract_outline(text: str) -> List[OutlineEntry]:
    outline = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        for prefix, level in (("### ", 3), ("## ", 2), ("# ", 1)):
            if line.startswith(prefix):
                outline.append(OutlineEntry(level, line[len(prefix):], OUTLINE_KINDS[level]))
                break
    return outline


def deck_stats(text: str, deck: Optional[Deck] = None, has_images: bool = False) -> DeckStats:
    return DeckStats(
        word_count=count_words(text),
        reading_time=estimate_reading_time(text),
        outline=tuple(extract_outline(text)),
        slide_count=len(deck) if deck is not None else 0,
        has_title=deck.has_title if deck is not None else False,
        has_images=has_images,
    )
