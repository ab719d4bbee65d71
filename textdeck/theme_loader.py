"""Theme loader for slide color/typography themes."""
from pathlib import Path
from typing import List

DEFAULT_THEME = "minimal_clean"

THEMES_DIR = Path(__file__).parent / "themes"


def get_css(theme: str = DEFAULT_THEME) -> str:
    """
    Load CSS content for the specified theme.

    Args:
        theme: Theme name (minimal_clean, dark_grey_matte, etc.)

    Returns:
        CSS content as string

    Raises:
        FileNotFoundError: If theme file doesn't exist
        ValueError: If theme name is invalid
    """
    # Validate theme name (security: prevent path traversal)
    if not theme.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")

    theme_path = THEMES_DIR / f"{theme}.css"

    if not theme_path.exists():
        raise FileNotFoundError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
        )

    with open(theme_path, 'r', encoding='utf-8') as f:
        css_content = f.read()

    return css_content


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        Sorted list of theme names
    """
    if not THEMES_DIR.exists():
        return []

    return sorted(f.stem for f in THEMES_DIR.glob("*.css") if f.is_file())


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_css(theme)
        return True
    except (FileNotFoundError, ValueError):
        return False
