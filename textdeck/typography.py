"""Font sizes and vertical metrics shared by pagination and drawing."""
from .config import Settings
from .measure import FontDescriptor
from .models import Body, ClassifiedLine, Heading, ListItem, Quote, Spacer

HEADING_SCALE = {1: 1.5, 2: 1.3, 3: 1.2}
QUOTE_SCALE = 1.1
SPACER_SCALE = 0.5
TITLE_SCALE = 1.5
SUBTITLE_SCALE = 0.8
FOOTER_SCALE = 0.7
INDICATOR_SCALE = 0.6


def body_font(settings: Settings) -> FontDescriptor:
    return FontDescriptor(size=settings.font_size, family=settings.font_family)


def heading_font(settings: Settings, level: int) -> FontDescriptor:
    return FontDescriptor(
        size=settings.font_size * HEADING_SCALE[level],
        bold=True,
        family=settings.font_family,
    )


def scaled_font(settings: Settings, scale: float, bold: bool = False) -> FontDescriptor:
    return FontDescriptor(size=settings.font_size * scale, bold=bold, family=settings.font_family)


def line_height(line: ClassifiedLine, settings: Settings) -> float:
    """
    Vertical space a classified line occupies on a slide.

    Raises:
        TypeError: For anything that is not a known line kind
    """
    fs = settings.font_size
    lh = settings.line_height_multiplier
    if isinstance(line, Heading):
        return fs * HEADING_SCALE[line.level] * lh
    if isinstance(line, Quote):
        return fs * QUOTE_SCALE * lh
    if isinstance(line, Spacer):
        return fs * SPACER_SCALE
    if isinstance(line, (Body, ListItem)):
        return fs * lh
    raise TypeError(f"Unknown line kind: {type(line).__name__}")
