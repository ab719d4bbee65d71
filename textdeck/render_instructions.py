"""
Build drawing instructions for a single slide.

The builder is pure: it turns a :class:`~textdeck.models.Page`, the
settings and (optionally) image metadata into a flat, ordered list of
primitives. Painting them is the job of a renderer such as
:class:`~textdeck.pil_renderer.PILRenderer`.

All text is emitted left-anchored at a computed x with a ``top`` baseline,
one primitive per styled run, so renderers do not need their own bidi or
alignment logic.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .config import Settings
from .exceptions import ImageNotReadyError, MeasurementUnavailableError
from .images import AVATAR_SIZE, ImageDrawParams, ImageMetadata, compute_fit, square_crop
from .inline_parser import parse_inline
from .measure import FontDescriptor, Measurer
from .models import Body, ClassifiedLine, Deck, Formatting, Heading, ListItem, Page, Quote, Spacer, StyledRun
from .typography import (
    FOOTER_SCALE,
    INDICATOR_SCALE,
    SUBTITLE_SCALE,
    TITLE_SCALE,
    body_font,
    heading_font,
    line_height,
    scaled_font,
)

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = "#ffff00"
PROGRESS_TRACK_COLOR = "#888888"
PROGRESS_BAR_HEIGHT = 12
PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"


# ----------------------------------------------------------------------
# Primitives
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    w: float
    h: float
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class LinearGradient:
    """Vertical gradient from ``color_top`` to ``color_bottom``."""
    x: float
    y: float
    w: float
    h: float
    color_top: str
    color_bottom: str


@dataclass(frozen=True)
class DrawImage:
    source: str
    params: ImageDrawParams
    alpha: float = 1.0


@dataclass(frozen=True)
class DrawCircularImage:
    """Image clipped to the circle inscribed in its destination square."""
    source: str
    params: ImageDrawParams

    @property
    def center(self):
        return (self.params.dx + self.params.dw / 2, self.params.dy + self.params.dh / 2)

    @property
    def radius(self) -> float:
        return self.params.dw / 2


@dataclass(frozen=True)
class DrawText:
    text: str
    x: float
    y: float
    font: FontDescriptor
    color: str
    align: str = "left"
    baseline: str = "top"
    alpha: float = 1.0
    direction: str = "ltr"


@dataclass(frozen=True)
class DrawLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0
    alpha: float = 1.0


DrawInstruction = Union[FillRect, LinearGradient, DrawImage, DrawCircularImage, DrawText, DrawLine]


@dataclass(frozen=True)
class SlideImages:
    """Metadata for the images a title slide may show."""
    background: Optional[ImageMetadata] = None
    avatar: Optional[ImageMetadata] = None

    def __bool__(self) -> bool:
        return self.background is not None or self.avatar is not None


def localize_digits(value, numerals: str = "persian") -> str:
    text = str(value)
    if numerals != "persian":
        return text
    return "".join(PERSIAN_DIGITS[int(ch)] if "0" <= ch <= "9" else ch for ch in text)


# ----------------------------------------------------------------------
# Builder
# ----------------------------------------------------------------------
class SlideInstructionBuilder:
    """
    Lays out one slide at a time for a fixed settings snapshot.
    """

    def __init__(self, settings: Settings, measurer: Measurer, images: Optional[SlideImages] = None):
        if measurer is None or not callable(getattr(measurer, "measure", None)):
            raise MeasurementUnavailableError("A text measurer is required to position slide text")
        self.settings = settings
        self.measurer = measurer
        self.images = images or SlideImages()

    def build(self, page: Page, index: int, total: int) -> List[DrawInstruction]:
        """
        Args:
            page: Page to draw
            index: Zero-based position of the page in the deck
            total: Number of pages in the deck

        Raises:
            ImageNotReadyError: If a title page needs an image that has not loaded
        """
        if page.is_title:
            self._check_ready()

        out: List[DrawInstruction] = []
        out.extend(self._background())
        if page.is_title:
            out.extend(self._background_image())
            out.extend(self._title())
        else:
            out.extend(self._content(page))
        out.extend(self._footer(index, total))
        return out

    def _check_ready(self):
        for role, image in (("background", self.images.background), ("avatar", self.images.avatar)):
            if image is not None and not image.ready:
                raise ImageNotReadyError(role)

    # -- background ----------------------------------------------------
    def _background(self) -> List[DrawInstruction]:
        s = self.settings
        w, h = s.slide_width, s.slide_height
        if s.bg_color1.lower() != s.bg_color2.lower():
            return [LinearGradient(0, 0, w, h, s.bg_color1, s.bg_color2)]
        return [FillRect(0, 0, w, h, s.bg_color1)]

    def _background_image(self) -> List[DrawInstruction]:
        bg = self.images.background
        if bg is None:
            return []
        s = self.settings
        params = compute_fit(bg, s.slide_width, s.slide_height, s.bg_image_mode)
        return [DrawImage("background", params, alpha=s.bg_opacity)]

    # -- title slide ---------------------------------------------------
    def _title(self) -> List[DrawInstruction]:
        s = self.settings
        w, h = s.slide_width, s.slide_height
        zone = s.safe_zone
        out: List[DrawInstruction] = []

        y = zone.top + (h - zone.top - zone.bottom) / 2
        if s.subtitle_text:
            y -= 50

        avatar = self.images.avatar
        if avatar is not None:
            crop = square_crop(avatar)
            img_y = y - AVATAR_SIZE - 10
            params = ImageDrawParams(
                crop.sx, crop.sy, crop.sw, crop.sh,
                w / 2 - AVATAR_SIZE / 2, img_y, AVATAR_SIZE, AVATAR_SIZE,
            )
            out.append(DrawCircularImage("avatar", params))
            y += AVATAR_SIZE / 2 + 15

        title_font = scaled_font(s, TITLE_SCALE)
        out.extend(self._runs(parse_inline(s.title_text), w / 2, y - title_font.size / 2,
                              title_font, s.text_color, align="center"))

        if s.subtitle_text:
            out.append(DrawLine(w / 2 - 100, y + 35, w / 2 + 100, y + 35, s.text_color, width=2, alpha=0.5))
            subtitle_font = scaled_font(s, SUBTITLE_SCALE)
            out.extend(self._runs(parse_inline(s.subtitle_text), w / 2, y + 70 - subtitle_font.size / 2,
                                  subtitle_font, s.text_color, align="center"))
        return out

    # -- content slide -------------------------------------------------
    def _content(self, page: Page) -> List[DrawInstruction]:
        s = self.settings
        margin = s.padding + s.safe_zone.side
        anchor = s.slide_width - margin if s.is_rtl else margin
        edge = "right" if s.is_rtl else "left"
        y = s.padding + s.safe_zone.top

        out: List[DrawInstruction] = []
        for line in page.lines:
            out.extend(self._line(line, anchor, y, edge))
            y += line_height(line, s)
        return out

    def _line(self, line: ClassifiedLine, anchor: float, y: float, edge: str) -> List[DrawInstruction]:
        s = self.settings
        if isinstance(line, Heading):
            return self._runs(parse_inline(line.text), anchor, y, heading_font(s, line.level),
                              s.accent_color, align=edge)
        if isinstance(line, Quote):
            runs = [StyledRun('"')] + parse_inline(line.text) + [StyledRun('"')]
            return self._runs(runs, anchor, y, body_font(s).with_style(italic=True), s.accent_color, align=edge)
        if isinstance(line, (Body, ListItem)):
            runs = parse_inline(line.text)
            if line.use_bullet and line.is_first_of_paragraph:
                runs = [StyledRun(f"{s.bullet_char} ")] + runs
            return self._runs(runs, anchor, y, body_font(s), s.text_color, align=edge)
        if isinstance(line, Spacer):
            return []
        raise TypeError(f"Unknown line kind: {type(line).__name__}")

    def _runs(self, runs: Sequence[StyledRun], anchor: float, top: float, base: FontDescriptor,
              color: str, align: str) -> List[DrawInstruction]:
        """Place *runs* on one visual line; first run is rightmost in RTL."""
        fonts = [
            base.with_style(bold=base.bold or run.has(Formatting.BOLD),
                            italic=base.italic or run.has(Formatting.ITALIC))
            for run in runs
        ]
        widths = [self.measurer.measure(run.text, font) for run, font in zip(runs, fonts)]
        total = sum(widths)

        if align == "center":
            left = anchor - total / 2
        elif align == "right":
            left = anchor - total
        else:
            left = anchor

        out: List[DrawInstruction] = []
        right = left + total
        cursor = left
        for run, font, width in zip(runs, fonts, widths):
            if self.settings.is_rtl:
                x = right - width
                right = x
            else:
                x = cursor
                cursor += width
            out.extend(self._run(run, x, top, width, font, color))
        return out

    def _run(self, run: StyledRun, x: float, top: float, width: float, font: FontDescriptor,
             color: str) -> List[DrawInstruction]:
        size = font.size
        out: List[DrawInstruction] = []
        if run.has(Formatting.HIGHLIGHT):
            out.append(FillRect(x, top - 2, width, size + 4, HIGHLIGHT_COLOR))
        if run.has(Formatting.CODE):
            out.append(FillRect(x, top - 2, width, size + 4, color, alpha=0.12))

        out.append(DrawText(run.text, x, top, font, color, direction=self.settings.direction))

        stroke = max(1.0, size / 15)
        if run.has(Formatting.STRIKETHROUGH):
            out.append(DrawLine(x, top + size / 2, x + width, top + size / 2, color, width=stroke))
        if run.has(Formatting.UNDERLINE):
            out.append(DrawLine(x, top + size, x + width, top + size, color, width=stroke))
        return out

    # -- footer --------------------------------------------------------
    def _footer(self, index: int, total: int) -> List[DrawInstruction]:
        s = self.settings
        w, h = s.slide_width, s.slide_height
        zone = s.safe_zone
        out: List[DrawInstruction] = []

        if s.footer_text:
            out.append(DrawText(s.footer_text, w / 2, h - s.padding / 2 - zone.bottom,
                                scaled_font(s, FOOTER_SCALE), s.text_color, align="center", baseline="bottom",
                                direction=s.direction))

        indicator = f"{localize_digits(index + 1, s.numerals)} / {localize_digits(total, s.numerals)}"
        out.append(DrawText(indicator, w / 2, h - 20 - zone.bottom, scaled_font(s, INDICATOR_SCALE),
                            s.text_color, align="center", baseline="bottom", alpha=0.7))

        bar_x = s.padding + zone.side
        bar_w = w - 2 * bar_x
        bar_y = h - PROGRESS_BAR_HEIGHT - zone.bottom
        progress = (index + 1) / total if total > 0 else 1.0
        fill_w = bar_w * progress
        fill_x = bar_x + bar_w - fill_w if s.is_rtl else bar_x

        out.append(FillRect(bar_x, bar_y, bar_w, PROGRESS_BAR_HEIGHT, PROGRESS_TRACK_COLOR, alpha=0.18))
        out.append(FillRect(fill_x, bar_y, fill_w, PROGRESS_BAR_HEIGHT, s.primary_color, alpha=0.7))
        return out


def build_slide(page: Page, index: int, total: int, settings: Settings, measurer: Measurer,
                images: Optional[SlideImages] = None) -> List[DrawInstruction]:
    """Draw instructions for *page* at position *index* of *total*."""
    return SlideInstructionBuilder(settings, measurer, images).build(page, index, total)


def build_deck(deck: Deck, settings: Settings, measurer: Measurer,
               images: Optional[SlideImages] = None) -> List[List[DrawInstruction]]:
    """Draw instructions for every page of *deck*, in deck order."""
    builder = SlideInstructionBuilder(settings, measurer, images)
    total = len(deck)
    return [builder.build(page, i, total) for i, page in enumerate(deck)]
