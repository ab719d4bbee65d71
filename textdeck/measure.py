"""
Text measurement adapters.

The layout core never talks to a font backend directly; it receives a
measurer with a single ``measure(text, font)`` method. Two implementations
ship with the package:

* :class:`PillowMeasurer` – real glyph metrics through Pillow's FreeType
  bindings. Also hands out the loaded fonts to :class:`~textdeck.pil_renderer.PILRenderer`.
* :class:`FixedWidthMeasurer` – every character has the same advance. Fully
  deterministic, used by the test-suite and when no font is available.
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Vazirmatn"


@dataclass(frozen=True)
class FontDescriptor:
    """Size and style of the font a piece of text is drawn with."""
    size: float
    bold: bool = False
    italic: bool = False
    family: str = DEFAULT_FONT_FAMILY

    @property
    def style_key(self) -> str:
        if self.bold and self.italic:
            return "bold_italic"
        if self.bold:
            return "bold"
        if self.italic:
            return "italic"
        return "regular"

    def with_style(self, bold: bool = None, italic: bool = None) -> "FontDescriptor":
        return replace(
            self,
            bold=self.bold if bold is None else bold,
            italic=self.italic if italic is None else italic,
        )

    def css(self) -> str:
        """Canvas-style font shorthand, e.g. ``bold 45px Vazirmatn``."""
        parts = []
        if self.italic:
            parts.append("italic")
        if self.bold:
            parts.append("bold")
        parts.append(f"{self.size:g}px")
        parts.append(self.family)
        return " ".join(parts)


class Measurer(Protocol):
    def measure(self, text: str, font: FontDescriptor) -> float:
        ...


class FixedWidthMeasurer:
    """
    Width = ``len(text) * font.size * ratio``.

    Bold text is measured ``bold_factor`` times wider so that style-aware
    layout is still exercised without real fonts.
    """

    def __init__(self, ratio: float = 0.5, bold_factor: float = 1.0):
        self.ratio = ratio
        self.bold_factor = bold_factor

    def measure(self, text: str, font: FontDescriptor) -> float:
        width = len(text) * font.size * self.ratio
        if font.bold:
            width *= self.bold_factor
        return width


FontPaths = Dict[str, Union[str, Path]]


class PillowMeasurer:
    """
    Measure text with Pillow TrueType fonts.

    Args:
        font_paths: Mapping of style key (``regular``, ``bold``, ``italic``,
            ``bold_italic``) to a font file. Missing styles fall back to
            ``regular``; with no ``regular`` font Pillow's bundled default
            font is used.
        debug: Log font resolution details
    """

    def __init__(self, font_paths: Optional[FontPaths] = None, debug: bool = False):
        self.font_paths = {k: Path(v) for k, v in (font_paths or {}).items() if v}
        self.debug = debug
        self._cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}

    def _resolve_path(self, style_key: str) -> Optional[Path]:
        if style_key in self.font_paths:
            return self.font_paths[style_key]
        if style_key == "bold_italic" and "bold" in self.font_paths:
            return self.font_paths["bold"]
        return self.font_paths.get("regular")

    def get_font(self, font: FontDescriptor):
        """Return (and cache) the Pillow font object for *font*."""
        size = max(1, int(round(font.size)))
        key = (font.style_key, size)
        if key in self._cache:
            return self._cache[key]

        path = self._resolve_path(font.style_key)
        if path is not None:
            loaded = ImageFont.truetype(str(path), size)
            if self.debug:
                logger.debug(f"🔤 Loaded {path.name} at {size}px for {font.css()}")
        else:
            loaded = ImageFont.load_default(size=size)
            if self.debug:
                logger.debug(f"🔤 No font file for '{font.style_key}', using Pillow default at {size}px")

        self._cache[key] = loaded
        return loaded

    def measure(self, text: str, font: FontDescriptor) -> float:
        if not text:
            return 0.0
        return float(self.get_font(font).getlength(text))
