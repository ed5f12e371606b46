"""Render tree produced by the note renderer.

Blocks and spans are frozen dataclasses; a display layer dispatches on the
concrete type.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Bold:
    text: str


@dataclass(frozen=True)
class Italic:
    text: str


@dataclass(frozen=True)
class Code:
    text: str


InlineSpan = Union[PlainText, Bold, Italic, Code]


@dataclass(frozen=True)
class Heading:
    level: int  # 1-4
    text: str


@dataclass(frozen=True)
class Label:
    """A standalone bold line shown as a small sub-heading."""

    text: str


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class BulletList:
    items: tuple[tuple[InlineSpan, ...], ...]


@dataclass(frozen=True)
class NumberedItem:
    label: str
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class NumberedList:
    items: tuple[NumberedItem, ...]


@dataclass(frozen=True)
class Table:
    headers: tuple[str, ...]
    rows: tuple[tuple[tuple[InlineSpan, ...], ...], ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    lines: tuple[str, ...]
    language: Optional[str] = None


@dataclass(frozen=True)
class CheckLine:
    ok: bool
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class Blank:
    pass


RenderBlock = Union[
    Heading,
    Label,
    Paragraph,
    BulletList,
    NumberedList,
    Table,
    CodeBlock,
    CheckLine,
    Blank,
]


@dataclass(frozen=True)
class RenderedNote:
    """Everything a note view shows, one entry per tab."""

    blocks: tuple[RenderBlock, ...]
    transcript: tuple[str, ...] = ()
    key_points: tuple[str, ...] = ()
    definitions: tuple[tuple[str, str], ...] = ()


def spans_text(spans: tuple[InlineSpan, ...]) -> str:
    """Concatenate span text with the styling dropped."""
    return "".join(span.text for span in spans)
