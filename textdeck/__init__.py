"""
textdeck

Lay out markdown-like text as a deck of fixed-size image slides.
"""

from .classifier import classify
from .config import Settings, load_settings
from .exceptions import ImageNotReadyError, InvalidInputError, MeasurementUnavailableError, SlideGenError
from .generator import SlideGenerator
from .inline_parser import parse_inline
from .layout_engine import LayoutEngine, paginate
from .measure import FixedWidthMeasurer, FontDescriptor, PillowMeasurer
from .models import Body, Deck, Formatting, Heading, ListItem, Page, Quote, Spacer, StyledRun
from .render_instructions import SlideImages, build_slide
from .text_wrap import wrap

__all__ = [
    'SlideGenerator', 'LayoutEngine', 'Settings', 'load_settings',
    'parse_inline', 'wrap', 'classify', 'paginate', 'build_slide', 'SlideImages',
    'FontDescriptor', 'FixedWidthMeasurer', 'PillowMeasurer',
    'StyledRun', 'Formatting', 'Heading', 'Quote', 'ListItem', 'Body', 'Spacer', 'Page', 'Deck',
    'SlideGenError', 'InvalidInputError', 'ImageNotReadyError', 'MeasurementUnavailableError',
]
