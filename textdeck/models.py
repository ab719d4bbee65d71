"""
Data models for the slide layout engine.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, Tuple, Union


class Formatting(Enum):
    """Inline formatting flags, listed in overlap-resolution priority order."""
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    HIGHLIGHT = "highlight"


@dataclass(frozen=True)
class StyledRun:
    """
    A contiguous span of text sharing one formatting flag (or none).
    """
    text: str
    formatting: FrozenSet[Formatting] = frozenset()

    @property
    def is_plain(self) -> bool:
        return not self.formatting

    def has(self, flag: Formatting) -> bool:
        return flag in self.formatting


@dataclass(frozen=True)
class Heading:
    text: str
    level: int

    def __post_init__(self):
        if self.level not in (1, 2, 3):
            raise ValueError(f"Heading level must be 1, 2 or 3, got {self.level}")


@dataclass(frozen=True)
class Quote:
    text: str


@dataclass(frozen=True)
class ListItem:
    text: str
    is_first_of_paragraph: bool = True
    use_bullet: bool = False


@dataclass(frozen=True)
class Body:
    text: str
    is_first_of_paragraph: bool = True
    use_bullet: bool = False


@dataclass(frozen=True)
class Spacer:
    pass


ClassifiedLine = Union[Heading, Quote, ListItem, Body, Spacer]


def is_slide_break(line: ClassifiedLine) -> bool:
    """A level-3 heading always opens a new slide."""
    return isinstance(line, Heading) and line.level == 3


@dataclass(frozen=True)
class Page:
    """
    One slide's worth of classified lines.

    Title pages carry no lines; they are drawn from the settings' title and
    subtitle text instead.
    """
    lines: Tuple[ClassifiedLine, ...] = ()
    is_title: bool = False

    @classmethod
    def title(cls) -> "Page":
        return cls(lines=(), is_title=True)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[ClassifiedLine]:
        return iter(self.lines)


@dataclass(frozen=True)
class Deck:
    """
    Ordered slides; index order is the final export order.
    """
    pages: Tuple[Page, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __getitem__(self, index: int) -> Page:
        return self.pages[index]

    @property
    def has_title(self) -> bool:
        return bool(self.pages) and self.pages[0].is_title

    def with_title_page(self) -> "Deck":
        """Return a new deck with a title page prepended."""
        if self.has_title:
            return self
        return Deck(pages=(Page.title(),) + self.pages)
