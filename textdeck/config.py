"""
Slide settings and the constants behind them.

A :class:`Settings` object is an immutable snapshot: the layout core reads it
and never changes it. Build one from a theme with :func:`load_settings`, or
from a saved JSON settings file, and derive variants with
:meth:`Settings.replace`.
"""
import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .css_utils import CSSParser
from .theme_loader import DEFAULT_THEME

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 30
DEFAULT_PADDING = 90
DEFAULT_LINE_HEIGHT = 2.0
DEFAULT_BULLET = "•"
DEFAULT_FONT_FAMILY = "Vazirmatn"
DEFAULT_BG_OPACITY = 0.3
DEFAULT_BG_IMAGE_MODE = "cover-center"
FOOTER_RESERVE_PX = 80
MAX_PREVIEW_SLIDES = 5
WORDS_PER_MINUTE = 200

BULLET_OPTIONS = ("✅", "🔹", "⚫️", "➡️", "🔸", "📌", "⭐", "•")
BG_IMAGE_MODES = ("cover-top", "cover-center", "cover-bottom", "contain", "stretch")
DIRECTIONS = ("rtl", "ltr")
NUMERALS = ("persian", "latin")

# Keys a saved settings file must contain to be accepted
REQUIRED_SETTINGS_KEYS = ("fontSize", "padding", "lineHeightMultiplier")


@dataclass(frozen=True)
class SafeZone:
    """Insets that platform UI may cover (story progress bar, reply box)."""
    top: int = 0
    bottom: int = 0
    side: int = 0


@dataclass(frozen=True)
class SlideFormat:
    name: str
    width: int
    height: int
    safe_zone: SafeZone = SafeZone()


SLIDE_FORMATS = {
    "post": SlideFormat("post", 1080, 1080),
    "story": SlideFormat("story", 1080, 1920, SafeZone(top=250, bottom=250, side=60)),
}


@dataclass(frozen=True)
class Settings:
    """
    Everything the layout core and instruction builder read.
    """
    font_size: float = DEFAULT_FONT_SIZE
    padding: float = DEFAULT_PADDING
    line_height_multiplier: float = DEFAULT_LINE_HEIGHT
    bullet_char: str = DEFAULT_BULLET
    use_bullets: bool = True
    slide_format: str = "post"
    title_text: str = ""
    subtitle_text: str = ""
    footer_text: str = ""
    bg_color1: str = "#f5f5f5"
    bg_color2: str = "#e0e0e0"
    text_color: str = "#212121"
    primary_color: str = "#007bff"
    accent_color: str = "#28a745"
    bg_opacity: float = DEFAULT_BG_OPACITY
    bg_image_mode: str = DEFAULT_BG_IMAGE_MODE
    direction: str = "rtl"
    numerals: str = "persian"
    font_family: str = DEFAULT_FONT_FAMILY
    footer_reserve: float = FOOTER_RESERVE_PX
    theme: str = DEFAULT_THEME

    def __post_init__(self):
        if self.slide_format not in SLIDE_FORMATS:
            raise ValueError(f"Unknown slide format '{self.slide_format}'. Available: {sorted(SLIDE_FORMATS)}")
        if self.bg_image_mode not in BG_IMAGE_MODES:
            raise ValueError(f"Unknown background image mode '{self.bg_image_mode}'. Available: {list(BG_IMAGE_MODES)}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"Unknown text direction '{self.direction}'")
        if self.numerals not in NUMERALS:
            raise ValueError(f"Unknown numeral system '{self.numerals}'")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        if self.padding < 0:
            raise ValueError(f"padding must not be negative, got {self.padding}")
        if self.line_height_multiplier < 0:
            raise ValueError(f"line_height_multiplier must not be negative, got {self.line_height_multiplier}")
        if not 0.0 <= self.bg_opacity <= 1.0:
            raise ValueError(f"bg_opacity must be between 0 and 1, got {self.bg_opacity}")

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------
    @property
    def format(self) -> SlideFormat:
        return SLIDE_FORMATS[self.slide_format]

    @property
    def safe_zone(self) -> SafeZone:
        return self.format.safe_zone

    @property
    def slide_width(self) -> int:
        return self.format.width

    @property
    def slide_height(self) -> int:
        return self.format.height

    @property
    def content_width(self) -> float:
        return self.slide_width - 2 * (self.padding + self.safe_zone.side)

    @property
    def max_content_height(self) -> float:
        """Lowest y a content line may reach before the footer area."""
        zone = self.safe_zone
        return self.slide_height - self.padding - self.footer_reserve - zone.top - zone.bottom

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    def replace(self, **changes) -> "Settings":
        return replace(self, **changes)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """camelCase mapping, the shape of a saved settings file."""
        return {_to_camel(k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["Settings"] = None) -> "Settings":
        """
        Build settings from a mapping with camelCase or snake_case keys.

        Unknown keys and null values are ignored (with a debug log) so
        settings files written by newer versions still load. Numeric
        strings such as ``"30"`` are accepted for numeric fields.

        Raises:
            ValueError: If a value has the wrong type for its key
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _ALIASES.get(key, _to_snake(key))
            if name not in known:
                logger.debug(f"Ignoring unknown settings key '{key}'")
            elif value is None:
                logger.debug(f"Ignoring null value for settings key '{key}'")
            else:
                values[name] = _coerce(key, name, value)
        return replace(base or cls(), **values)


_ALIASES = {
    "lineHeight": "line_height_multiplier",
    "bgOpacity": "bg_opacity",
    "format": "slide_format",
}


_NUMERIC_FIELDS = {"font_size", "padding", "line_height_multiplier", "bg_opacity", "footer_reserve"}
_BOOL_FIELDS = {"use_bullets"}


def _coerce(key: str, name: str, value: Any) -> Any:
    """Check *value* against the type of field *name*; *key* is used in errors."""
    if name in _NUMERIC_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"❌ Setting '{key}' must be a number, got {value!r}")
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                raise ValueError(f"❌ Setting '{key}' must be a number, got {value!r}") from None
        return value
    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"❌ Setting '{key}' must be true or false, got {value!r}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"❌ Setting '{key}' must be a string, got {value!r}")
    return value


def _to_snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def settings_from_theme(theme: str = DEFAULT_THEME) -> Settings:
    """Settings populated with a theme's palette and typography."""
    css = CSSParser(theme)
    values: Dict[str, Any] = dict(css.get_colors())
    values["theme"] = theme
    if css.has_variable("font-size"):
        values["font_size"] = css.get_px_value("font-size")
    if css.has_variable("slide-padding"):
        values["padding"] = css.get_px_value("slide-padding")
    if css.has_variable("line-height"):
        values["line_height_multiplier"] = css.get_float_value("line-height")
    if css.has_variable("font-family"):
        values["font_family"] = css.get_string_value("font-family")
    return Settings(**values)


def read_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JSON settings file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a JSON object or misses required keys
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"❌ Settings file '{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"❌ Settings file '{path}' must contain a JSON object")

    missing = [k for k in REQUIRED_SETTINGS_KEYS if k not in data]
    if missing:
        raise ValueError(f"❌ Settings file '{path}' is missing required keys: {missing}")

    return data


def write_settings_file(settings: Settings, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, ensure_ascii=False, indent=2)
    return path


def load_settings(
    theme: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    settings_file: Optional[Union[str, Path]] = None,
) -> Settings:
    """
    Resolve settings from, in increasing precedence: defaults, theme,
    settings file, explicit overrides.

    The theme named in the settings file is used when *theme* is None.
    """
    file_data = read_settings_file(settings_file) if settings_file else {}
    theme_name = theme or file_data.get("theme") or DEFAULT_THEME

    settings = settings_from_theme(theme_name)
    if file_data:
        settings = Settings.from_dict(file_data, base=settings)
        logger.debug(f"Loaded settings file {settings_file}")
    if overrides:
        settings = Settings.from_dict(overrides, base=settings)
    if settings.theme != theme_name:
        settings = settings.replace(theme=theme_name)
    return settings
