#!/usr/bin/env python3
"""
Main slide generator module that ties together layout engine, instruction
builder and Pillow renderer.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import Image

from .config import BULLET_OPTIONS, MAX_PREVIEW_SLIDES, Settings, load_settings
from .images import ImageDimensionCache, ImageInfo
from .layout_engine import LayoutEngine
from .measure import FontPaths, PillowMeasurer
from .models import Deck
from .paths import prepare_output_dir, resolve_asset, slide_filename
from .pil_renderer import PILRenderer
from .render_instructions import DrawInstruction, SlideImages, build_deck
from .stats import DeckStats, deck_stats

logger = logging.getLogger(__name__)


class SlideGenerator:
    """
    Main class for generating PNG slides from markdown-like text.
    """

    def __init__(
        self,
        *,
        output_dir,
        settings: Optional[Settings] = None,
        theme: Optional[str] = None,
        font_paths: Optional[FontPaths] = None,
        base_dir: Optional[str] = None,
        workers: int = 1,
        debug: bool = False,
    ):
        """Create a new :class:`SlideGenerator`.

        Parameters
        ----------
        output_dir
            Directory where the slide PNGs will be written.  *Required*.
        settings
            Settings snapshot to lay out with.  Loaded from *theme* when
            omitted.
        theme
            Name of the color theme (``minimal_clean`` / ``dark_grey_matte`` / …).
            Ignored when *settings* is given.
        font_paths
            Font files keyed by style (``regular``, ``bold``, ``italic``,
            ``bold_italic``).  Pillow's default font is used without them.
        base_dir
            Base directory for resolving relative image paths.
            If None, defaults to current working directory.
        workers
            Number of threads used to render slides.  Output order always
            follows deck order.
        debug
            Enable verbose logging.
        """
        self.debug = debug
        self.output_dir = output_dir
        self.settings = settings or load_settings(theme)
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.workers = max(1, workers)

        self.measurer = PillowMeasurer(font_paths, debug=debug)
        self.layout_engine = LayoutEngine(self.measurer, debug=debug)
        self.image_cache = ImageDimensionCache(debug)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def load_image(self, src) -> Tuple[Image.Image, ImageInfo]:
        """
        Decode an image and return it with its metadata.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a supported image
        """
        path = resolve_asset(src, base_dir=self.base_dir)
        if not path.exists():
            raise FileNotFoundError(f"Image '{path}' not found")

        info = self.image_cache.get_info(str(path))
        if info is None:
            raise ValueError(f"❌ '{path}' is not a supported image (JPEG, PNG, WEBP or GIF)")

        with Image.open(path) as img:
            img.load()
            decoded = img.convert("RGBA")
        return decoded, info

    def _load_images(self, background=None, avatar=None) -> Tuple[Dict[str, Image.Image], SlideImages]:
        sources: Dict[str, Image.Image] = {}
        meta = {}
        for role, src in (("background", background), ("avatar", avatar)):
            if src is None:
                continue
            sources[role], meta[role] = self.load_image(src)
            if self.debug:
                logger.debug(f"📷 {role} image {src}: {meta[role].width}x{meta[role].height}")
        return sources, SlideImages(**meta)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def build_deck(self, text: str) -> Deck:
        """Lay out *text* (plus the title page, if any) into a deck."""
        return self.layout_engine.build_deck(text, self.settings)

    def build_instructions(self, text: str, images: Optional[SlideImages] = None) -> List[List[DrawInstruction]]:
        deck = self.build_deck(text)
        return build_deck(deck, self.settings, self.measurer, images)

    def _render_all(self, instructions: List[List[DrawInstruction]], sources) -> List[Image.Image]:
        renderer = PILRenderer(self.measurer, sources, debug=self.debug)
        size = (self.settings.slide_width, self.settings.slide_height)

        def render(slide):
            return renderer.render(slide, size).convert("RGB")

        if self.workers == 1:
            return [render(slide) for slide in instructions]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(render, instructions))

    def generate(self, text: str, *, background=None, avatar=None) -> List[Path]:
        """
        Generate every slide of the deck as PNG files.

        Args:
            text: Markdown-like slide content
            background: Optional background image path (title slide only)
            avatar: Optional author image path (title slide only)

        Returns:
            list of written file paths in deck order
        """
        out_dir = prepare_output_dir(self.output_dir)
        sources, images = self._load_images(background, avatar)
        instructions = self.build_instructions(text, images)

        rendered = self._render_all(instructions, sources)

        paths = []
        total = len(rendered)
        for i, image in enumerate(rendered):
            path = out_dir / slide_filename(i, total)
            image.save(path, format="PNG")
            paths.append(path)

        if self.debug:
            logger.info(f"Slides saved to: {out_dir}")
            logger.info(f"Total slides: {total}")
            logger.info(f"Theme: {self.settings.theme}")

        return paths

    def preview(self, text: str, *, limit: int = MAX_PREVIEW_SLIDES, background=None,
                avatar=None) -> List[Image.Image]:
        """Render the first *limit* slides in memory."""
        sources, images = self._load_images(background, avatar)
        instructions = self.build_instructions(text, images)[:limit]
        return self._render_all(instructions, sources)

    def stats(self, text: str, *, has_images: bool = False) -> DeckStats:
        return deck_stats(text, self.build_deck(text), has_images=has_images)


def main():
    """Command-line entry point for the slide generator."""
    import argparse
    import sys

    from .exceptions import SlideGenError
    from .theme_loader import list_available_themes, validate_theme

    def _build_parser() -> argparse.ArgumentParser:
        p = argparse.ArgumentParser(prog="textdeck", description="Convert markdown-like text to a deck of PNG slides.")
        p.add_argument("text", type=Path, nargs="?", help="Text file to convert (omit for a title-only deck)")
        p.add_argument("--output", "-o", type=Path, default=Path("output"), help="Directory for slide PNGs")
        p.add_argument("--theme", "-t", help=f"Color theme ({', '.join(list_available_themes())})")
        p.add_argument("--settings", type=Path, help="JSON settings file")
        p.add_argument("--format", dest="slide_format", choices=["post", "story"], help="Slide format")
        p.add_argument("--title", help="Title slide text")
        p.add_argument("--subtitle", help="Title slide subtitle")
        p.add_argument("--footer", help="Footer text on every slide")
        p.add_argument("--bg-image", type=Path, help="Background image for the title slide")
        p.add_argument("--bg-mode", choices=["cover-top", "cover-center", "cover-bottom", "contain", "stretch"],
                       help="Background image fit mode")
        p.add_argument("--avatar", type=Path, help="Author image for the title slide")
        p.add_argument("--bullet", choices=BULLET_OPTIONS, help="Bullet character for paragraphs")
        p.add_argument("--no-bullets", action="store_true", help="Do not prefix paragraphs with bullets")
        p.add_argument("--font-size", type=float, help="Body font size in px")
        p.add_argument("--padding", type=float, help="Slide padding in px")
        p.add_argument("--line-height", type=float, help="Line height multiplier")
        p.add_argument("--direction", choices=["rtl", "ltr"], help="Text direction")
        p.add_argument("--numerals", choices=["persian", "latin"], help="Digits used for slide numbers")
        p.add_argument("--font", type=Path, help="Regular font file (TTF/OTF)")
        p.add_argument("--font-bold", type=Path, help="Bold font file (TTF/OTF)")
        p.add_argument("--preview", action="store_true", help=f"Only render the first {MAX_PREVIEW_SLIDES} slides")
        p.add_argument("--stats", action="store_true", help="Print word count, reading time and outline, then exit")
        p.add_argument("--workers", type=int, default=1, help="Render slides in parallel threads")
        p.add_argument("--debug", action="store_true", help="Enable verbose logging")
        return p

    def _overrides(args) -> Dict:
        values = {
            "slide_format": args.slide_format,
            "title_text": args.title,
            "subtitle_text": args.subtitle,
            "footer_text": args.footer,
            "bg_image_mode": args.bg_mode,
            "bullet_char": args.bullet,
            "font_size": args.font_size,
            "padding": args.padding,
            "line_height_multiplier": args.line_height,
            "direction": args.direction,
            "numerals": args.numerals,
        }
        if args.no_bullets:
            values["use_bullets"] = False
        return {k: v for k, v in values.items() if v is not None}

    def _run(args) -> None:
        if args.theme and not validate_theme(args.theme):
            raise ValueError(f"Unknown theme '{args.theme}'. Available themes: {list_available_themes()}")

        text = ""
        base_dir = Path.cwd()
        if args.text is not None:
            if not args.text.exists():
                logger.error(f"Text file '{args.text}' not found")
                sys.exit(1)
            text = args.text.read_text(encoding="utf-8")
            base_dir = args.text.parent

        settings = load_settings(args.theme, _overrides(args), args.settings)
        generator = SlideGenerator(
            output_dir=args.output,
            settings=settings,
            font_paths={"regular": args.font, "bold": args.font_bold},
            base_dir=base_dir,
            workers=args.workers,
            debug=args.debug,
        )

        if args.stats:
            stats = generator.stats(text, has_images=bool(args.bg_image or args.avatar))
            logger.info(f"Words: {stats.word_count}, reading time: {stats.reading_time} min, slides: {stats.slide_count}")
            for entry in stats.outline:
                logger.info(f"{'  ' * (entry.level - 1)}- [{entry.kind}] {entry.text}")
            return

        if args.preview:
            images = generator.preview(text, background=args.bg_image, avatar=args.avatar)
            out_dir = prepare_output_dir(args.output)
            for i, image in enumerate(images):
                image.save(out_dir / f"preview_{slide_filename(i, len(images))}", format="PNG")
            logger.info("✅ %d preview slide(s) written to %s", len(images), out_dir)
            return

        paths = generator.generate(text, background=args.bg_image, avatar=args.avatar)
        logger.info("✅ %d slide(s) written to %s", len(paths), prepare_output_dir(args.output))

    args = _build_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s  %(message)s")

    try:
        _run(args)
    except (SlideGenError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
