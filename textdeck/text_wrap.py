"""Greedy word wrapping against a measured pixel width."""
import re
from typing import Callable, List

_WHITESPACE = re.compile(r'\s+')


def wrap(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Wrap *text* into lines no wider than *max_width* where possible.

    Words are never split: a single word wider than *max_width* becomes its
    own (overflowing) line.

    Args:
        text: Text to wrap; any whitespace run separates words
        max_width: Available width in pixels
        measure: Returns the pixel width of a string in the target font

    Returns:
        Wrapped lines, words joined by single spaces
    """
    words = [w for w in _WHITESPACE.split(text) if w]
    lines: List[str] = []
    current = ""

    for word in words:
        candidate = f"{current} {word}" if current else word
        if current and measure(candidate) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)

    return lines
