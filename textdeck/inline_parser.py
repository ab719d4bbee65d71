"""
Inline markdown span parsing.

Six span types are recognised, each with its own delimiter pair::

    **bold**   *italic*   __underline__   ~~strike~~   `code`   ==highlight==

Spans do not nest: each run carries at most one flag. Delimiters that do
not form a complete pair are left in the text untouched.
"""
import re
from dataclasses import dataclass
from typing import List

from .models import Formatting, StyledRun

# Order doubles as tie-break priority when two spans start at the same offset.
INLINE_PATTERNS = (
    (Formatting.BOLD, re.compile(r'\*\*([^*]+)\*\*')),
    (Formatting.ITALIC, re.compile(r'(?<!\*)\*([^*]+)\*(?!\*)')),
    (Formatting.UNDERLINE, re.compile(r'__([^_]+)__')),
    (Formatting.STRIKETHROUGH, re.compile(r'~~([^~]+)~~')),
    (Formatting.CODE, re.compile(r'`([^`]+)`')),
    (Formatting.HIGHLIGHT, re.compile(r'==([^=]+)==')),
)

_PRIORITY = {flag: i for i, (flag, _) in enumerate(INLINE_PATTERNS)}


@dataclass(frozen=True)
class _Match:
    flag: Formatting
    start: int
    end: int
    content: str

    def overlaps(self, other: "_Match") -> bool:
        return self.start < other.end and other.start < self.end


def _find_matches(text: str) -> List[_Match]:
    matches = []
    for flag, pattern in INLINE_PATTERNS:
        for m in pattern.finditer(text):
            matches.append(_Match(flag, m.start(), m.end(), m.group(1)))

    # Bold wins over any italic it touches
    bold = [m for m in matches if m.flag is Formatting.BOLD]
    matches = [
        m for m in matches
        if m.flag is not Formatting.ITALIC or not any(m.overlaps(b) for b in bold)
    ]

    matches.sort(key=lambda m: (m.start, _PRIORITY[m.flag]))

    # Remaining overlaps: first by start offset wins, then by pattern priority
    accepted: List[_Match] = []
    for m in matches:
        if accepted and m.start < accepted[-1].end:
            continue
        accepted.append(m)
    return accepted


def parse_inline(text: str) -> List[StyledRun]:
    """
    Split *text* into styled runs.

    Args:
        text: One line of markdown-like text

    Returns:
        Runs whose concatenated text equals *text* with matched delimiters
        removed. Empty input gives an empty list.
    """
    if not text:
        return []

    runs: List[StyledRun] = []
    cursor = 0
    for match in _find_matches(text):
        if match.start > cursor:
            runs.append(StyledRun(text[cursor:match.start]))
        runs.append(StyledRun(match.content, frozenset({match.flag})))
        cursor = match.end

    if cursor < len(text):
        runs.append(StyledRun(text[cursor:]))

    return runs


def plain_text(text: str) -> str:
    """Return *text* with inline markdown delimiters stripped."""
    return "".join(run.text for run in parse_inline(text))
