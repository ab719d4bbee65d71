"""
CSS variable extraction for slide themes.

Themes only carry a ``:root`` block of custom properties; every value the
settings layer needs (colors, font size, padding, line height) is read from
there through :class:`CSSParser`.
"""
import re
from typing import Dict

from .theme_loader import DEFAULT_THEME, get_css

_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class CSSParser:
    """
    Read typed values out of a theme's ``:root`` custom properties.
    """

    def __init__(self, theme: str = DEFAULT_THEME):
        self.theme = theme
        self.css_content = get_css(theme)
        self._css_vars = None

    def get_css_variables(self) -> Dict[str, str]:
        """Extract all CSS variables from :root section. Cached for performance."""
        if self._css_vars is not None:
            return self._css_vars

        root_match = re.search(r':root\s*\{([^}]+)\}', self.css_content, re.DOTALL)
        if not root_match:
            raise ValueError(f"No :root section found in theme '{self.theme}'")

        root_content = root_match.group(1)

        variable_pattern = r'--([^:]+):\s*([^;]+);'
        css_vars = re.findall(variable_pattern, root_content)
        self._css_vars = {name.strip(): value.strip() for name, value in css_vars}

        return self._css_vars

    def has_variable(self, variable_name: str) -> bool:
        return variable_name in self.get_css_variables()

    def get_raw_value(self, variable_name: str) -> str:
        """Get raw CSS variable value."""
        vars_dict = self.get_css_variables()
        value = vars_dict.get(variable_name)
        if not value:
            raise ValueError(f"CSS variable '--{variable_name}' not found in theme '{self.theme}'")
        return value

    def get_px_value(self, variable_name: str) -> int:
        """Get pixel value from CSS variable."""
        value = self.get_raw_value(variable_name)

        px_match = re.search(r'(\d+)px', value)
        if not px_match:
            raise ValueError(f"CSS variable '--{variable_name}' is not a pixel value: {value}")

        return int(px_match.group(1))

    def get_float_value(self, variable_name: str) -> float:
        """Get a unitless number (e.g. line height) from CSS variable."""
        value = self.get_raw_value(variable_name)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"CSS variable '--{variable_name}' is not a number: {value}") from None

    def get_string_value(self, variable_name: str) -> str:
        """Get a string value with surrounding quotes stripped."""
        return self.get_raw_value(variable_name).strip('\'"')

    def get_color(self, variable_name: str) -> str:
        """Get a hex color from CSS variable."""
        value = self.get_raw_value(variable_name)
        if not _HEX_COLOR.match(value):
            raise ValueError(f"❌ CSS variable '--{variable_name}' in theme '{self.theme}' is not a hex color: {value}")
        return value

    def get_colors(self) -> Dict[str, str]:
        """Extract the five palette colors every theme must define."""
        return {
            'bg_color1': self.get_color('bg-color-1'),
            'bg_color2': self.get_color('bg-color-2'),
            'text_color': self.get_color('text-color'),
            'primary_color': self.get_color('primary-color'),
            'accent_color': self.get_color('accent-color'),
        }
