"""Data models for crafty-novels."""

from __future__ import annotations

from dataclasses import dataclass, field

from .minecraft import Format


@dataclass(frozen=True)
class Text:
    """A run of plain text with no spaces or escapes in it."""

    text: str


@dataclass(frozen=True)
class StyleMark:
    """A hidden marker that changes the formatting of the text after it."""

    format: Format


@dataclass(frozen=True)
class Space:
    """A literal space (``" "``)."""


@dataclass(frozen=True)
class LineBreak:
    """The end of a non-empty source line."""


@dataclass(frozen=True)
class ParagraphBreak:
    """The space between paragraphs, produced by an empty source line."""


@dataclass(frozen=True)
class PageBreak:
    """The boundary between pages (a thematic break)."""


Token = Text | StyleMark | Space | LineBreak | ParagraphBreak | PageBreak


def is_break(token: Token) -> bool:
    """Whether a token corresponds to some kind of break, spaces included."""
    return isinstance(token, (LineBreak, ParagraphBreak, PageBreak, Space))


def is_white_space(token: Token) -> bool:
    return isinstance(token, Space) or is_break(token)


def is_text(token: Token) -> bool:
    return isinstance(token, Text)


@dataclass(frozen=True)
class Title:
    value: str


@dataclass(frozen=True)
class Author:
    value: str


Metadata = Title | Author


@dataclass(frozen=True)
class TokenList:
    """A tokenized document.

    Built once per conversion and never mutated afterwards; both sequences
    keep the order in which they were encountered.

    Attributes:
        metadata: Frontmatter fields in encounter order.
        tokens: Body tokens in source order.
    """

    metadata: tuple[Metadata, ...] = ()
    tokens: tuple[Token, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "metadata", tuple(self.metadata))
        object.__setattr__(self, "tokens", tuple(self.tokens))

    @property
    def title(self) -> str | None:
        return next((item.value for item in self.metadata if isinstance(item, Title)), None)

    @property
    def author(self) -> str | None:
        return next((item.value for item in self.metadata if isinstance(item, Author)), None)


@dataclass
class LineState:
    """Per-line tokenizer state.

    Attributes:
        word: Characters of the word being accumulated.
        trailing_style: Whether a format opened on this line is still unreset.
    """

    word: list[str] = field(default_factory=list)
    trailing_style: bool = False
