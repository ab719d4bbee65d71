#!/usr/bin/env python3
"""
Pillow renderer for slide draw instructions.

Opaque shapes and text are drawn straight onto the canvas; only
translucent instructions and images go through a separate layer that is
alpha-composited on top.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, features

from .measure import PillowMeasurer
from .render_instructions import (
    DrawCircularImage,
    DrawImage,
    DrawInstruction,
    DrawLine,
    DrawText,
    FillRect,
    LinearGradient,
)

logger = logging.getLogger(__name__)

_H_ANCHOR = {"left": "l", "center": "m", "right": "r"}
_V_ANCHOR = {"top": "a", "middle": "m", "bottom": "d"}


def _rgba(color: str, alpha: float = 1.0) -> Tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, int(round(255 * alpha))


def _box(x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
    return int(round(x)), int(round(y)), int(round(x + w)), int(round(y + h))


class PILRenderer:
    """
    Paint draw instructions onto an RGBA canvas.
    """

    def __init__(self, measurer: PillowMeasurer, sources: Optional[Dict[str, Image.Image]] = None,
                 debug: bool = False):
        """
        Args:
            measurer: Supplies the same fonts that were used for layout
            sources: Decoded images keyed by instruction source name
                (``background``, ``avatar``)
            debug: Enable verbose logging
        """
        self.measurer = measurer
        self.sources = sources or {}
        self.debug = debug
        # Right-to-left shaping needs Pillow's RAQM layout engine
        self.raqm = features.check("raqm")
        self._warned_rtl = False

    def render(self, instructions: Sequence[DrawInstruction], size: Tuple[int, int]) -> Image.Image:
        canvas = Image.new("RGBA", size, (0, 0, 0, 0))
        for instruction in instructions:
            canvas = self._draw(canvas, instruction)
        return canvas

    def render_to_file(self, instructions: Sequence[DrawInstruction], size: Tuple[int, int],
                       output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.render(instructions, size).convert("RGB").save(output_path, format="PNG")
        if self.debug:
            logger.debug(f"🖼️ Wrote {output_path}")
        return output_path

    # ------------------------------------------------------------------
    def _draw(self, canvas: Image.Image, instruction: DrawInstruction) -> Image.Image:
        if isinstance(instruction, LinearGradient):
            return self._gradient(canvas, instruction)
        if isinstance(instruction, FillRect):
            return self._paint(canvas, instruction.alpha, lambda d: d.rectangle(
                _box(instruction.x, instruction.y, instruction.w - 1, instruction.h - 1),
                fill=_rgba(instruction.color, instruction.alpha)))
        if isinstance(instruction, DrawLine):
            return self._paint(canvas, instruction.alpha, lambda d: d.line(
                (instruction.x1, instruction.y1, instruction.x2, instruction.y2),
                fill=_rgba(instruction.color, instruction.alpha),
                width=max(1, int(round(instruction.width)))))
        if isinstance(instruction, DrawText):
            return self._text(canvas, instruction)
        if isinstance(instruction, DrawImage):
            return self._image(canvas, instruction)
        if isinstance(instruction, DrawCircularImage):
            return self._circular_image(canvas, instruction)
        raise TypeError(f"Unknown draw instruction: {type(instruction).__name__}")

    def _paint(self, canvas: Image.Image, alpha: float, paint) -> Image.Image:
        if alpha >= 1.0:
            paint(ImageDraw.Draw(canvas))
            return canvas
        return self._overlay(canvas, paint)

    def _overlay(self, canvas: Image.Image, paint) -> Image.Image:
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        paint(ImageDraw.Draw(layer))
        return Image.alpha_composite(canvas, layer)

    def _gradient(self, canvas: Image.Image, g: LinearGradient) -> Image.Image:
        top = _rgba(g.color_top)
        bottom = _rgba(g.color_bottom)
        x0, y0, x1, y1 = _box(g.x, g.y, g.w, g.h)
        span = max(1, y1 - y0 - 1)

        def paint(draw):
            for row in range(y0, y1):
                t = (row - y0) / span
                color = tuple(int(round(a + (b - a) * t)) for a, b in zip(top, bottom))
                draw.line((x0, row, x1 - 1, row), fill=color)

        return self._paint(canvas, 1.0, paint)

    def _text_options(self, t: DrawText) -> Dict[str, Any]:
        """Extra ``ImageDraw.text`` arguments for the text's direction."""
        if t.direction != "rtl":
            return {}
        if self.raqm:
            return {"direction": "rtl"}
        if not self._warned_rtl:
            logger.warning("⚠️ Pillow was built without RAQM; right-to-left text will not be shaped. "
                           "Install Pillow with libraqm for Persian/Arabic slides.")
            self._warned_rtl = True
        return {}

    def _text(self, canvas: Image.Image, t: DrawText) -> Image.Image:
        font = self.measurer.get_font(t.font)
        anchor = _H_ANCHOR[t.align] + _V_ANCHOR[t.baseline]
        options = self._text_options(t)
        return self._paint(canvas, t.alpha, lambda d: d.text(
            (t.x, t.y), t.text, font=font, fill=_rgba(t.color, t.alpha), anchor=anchor, **options))

    def _source(self, name: str) -> Image.Image:
        if name not in self.sources:
            raise KeyError(f"No image registered for '{name}'")
        return self.sources[name].convert("RGBA")

    def _crop_resize(self, source: Image.Image, p) -> Image.Image:
        crop = source.crop(_box(p.sx, p.sy, p.sw, p.sh))
        return crop.resize((max(1, int(round(p.dw))), max(1, int(round(p.dh)))), Image.Resampling.LANCZOS)

    def _image(self, canvas: Image.Image, instruction: DrawImage) -> Image.Image:
        p = instruction.params
        tile = self._crop_resize(self._source(instruction.source), p)
        if instruction.alpha < 1.0:
            alpha = tile.getchannel("A").point(lambda v: int(v * instruction.alpha))
            tile.putalpha(alpha)
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(tile, (int(round(p.dx)), int(round(p.dy))))
        return Image.alpha_composite(canvas, layer)

    def _circular_image(self, canvas: Image.Image, instruction: DrawCircularImage) -> Image.Image:
        p = instruction.params
        tile = self._crop_resize(self._source(instruction.source), p)
        mask = Image.new("L", tile.size, 0)
        ImageDraw.Draw(mask).ellipse((0, 0, tile.size[0] - 1, tile.size[1] - 1), fill=255)
        tile.putalpha(Image.composite(tile.getchannel("A"), mask, mask))
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(tile, (int(round(p.dx)), int(round(p.dy))))
        return Image.alpha_composite(canvas, layer)
