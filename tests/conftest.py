import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import textdeck` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from textdeck.config import Settings  # noqa: E402
from textdeck.measure import FixedWidthMeasurer  # noqa: E402


@pytest.fixture
def measurer():
    """Every character is half the font size wide: 15px at the default 30px."""
    return FixedWidthMeasurer(ratio=0.5)


@pytest.fixture
def settings():
    return Settings(font_size=30, padding=90, line_height_multiplier=2, use_bullets=False)
