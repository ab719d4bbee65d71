"""
Split raw text into classified, wrapped lines.

Each source line is matched against the block prefixes in priority order::

    "### "  heading (level 3, starts a new slide)
    "## "   heading (level 2)
    "# "    heading (level 1)
    "> "    quote
    "- "    list paragraph   (also "* ")
    ""      dropped
    other   body paragraph

List and body paragraphs are word-wrapped to the content width and followed
by a single spacer.
"""
from typing import List, Optional

from .config import Settings
from .exceptions import MeasurementUnavailableError
from .measure import Measurer
from .models import Body, ClassifiedLine, Heading, ListItem, Quote, Spacer
from .text_wrap import wrap
from .typography import body_font

HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))
QUOTE_PREFIX = "> "
LIST_PREFIXES = ("- ", "* ")


def paragraph_width(settings: Settings, measurer: Measurer) -> float:
    """Width available to wrapped paragraph text, leaving room for a bullet."""
    width = settings.content_width
    if settings.use_bullets:
        width -= measurer.measure(f"{settings.bullet_char} ", body_font(settings))
    return width


def classify(raw_text: str, settings: Settings, measurer: Optional[Measurer]) -> List[ClassifiedLine]:
    """
    Classify and wrap *raw_text*.

    Args:
        raw_text: Markdown-like source text
        settings: Slide settings (content width, bullets, font)
        measurer: Text measurer used for wrapping

    Returns:
        Classified lines in source order

    Raises:
        MeasurementUnavailableError: If *measurer* is missing
    """
    if measurer is None or not callable(getattr(measurer, "measure", None)):
        raise MeasurementUnavailableError("A text measurer is required to wrap paragraphs")

    font = body_font(settings)
    width = paragraph_width(settings, measurer)

    def measure(s: str) -> float:
        return measurer.measure(s, font)

    lines: List[ClassifiedLine] = []
    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        heading = _match_heading(line)
        if heading is not None:
            lines.append(heading)
        elif line.startswith(QUOTE_PREFIX):
            lines.append(Quote(line[len(QUOTE_PREFIX):]))
        elif line.startswith(LIST_PREFIXES):
            lines.extend(_paragraph(ListItem, line[2:], width, measure, settings))
        else:
            lines.extend(_paragraph(Body, line, width, measure, settings))

    return lines


def _match_heading(line: str) -> Optional[Heading]:
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(line[len(prefix):], level)
    return None


def _paragraph(kind, text, width, measure, settings: Settings) -> List[ClassifiedLine]:
    out: List[ClassifiedLine] = []
    for i, sub_line in enumerate(wrap(text, width, measure)):
        first = i == 0
        out.append(kind(sub_line, is_first_of_paragraph=first, use_bullet=settings.use_bullets and first))
    out.append(Spacer())
    return out
