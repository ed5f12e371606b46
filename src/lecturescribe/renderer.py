"""Render the notes dialect into a sequence of display blocks.

The generated notes use a narrow markdown-like dialect: ``-``/``•`` bullets,
``✓``/``✗`` check lines, bold-only lines as sub-headings, pipe tables and
decorative separator rules that are dropped. Each line is classified once,
in priority order; lists accumulate in two pending groups that are flushed
before any other block is emitted.
"""

import re
from enum import Enum
from typing import Optional

from .blocks import (
    Blank,
    Bold,
    BulletList,
    CheckLine,
    Code,
    CodeBlock,
    Heading,
    InlineSpan,
    Italic,
    Label,
    NumberedItem,
    NumberedList,
    Paragraph,
    PlainText,
    RenderBlock,
    RenderedNote,
    Table,
)
from .models import Note

_SEPARATOR_LINE_RE = re.compile(r"^[━─=\-*_✓•]{3,}$")
_INLINE_SEPARATOR_RE = re.compile(r"^[━─=\-*_]{3,}$")
_TABLE_RULE_RE = re.compile(r"^[\s|:\-]+$")
_BULLET_RE = re.compile(r"^[-•] ")
_BOLD_LINE_RE = re.compile(r"^\*\*[^*]+\*\*[:\s]*$")
_NUMBERED_RE = re.compile(r"^(\d+)\. (.*)")
_CHECK_RE = re.compile(r"^([✓✗]) ")
_INLINE_RE = re.compile(r"(`[^`]+`|\*\*[^*]+\*\*|\*[^*]+\*)")
_LEADING_STAR_RE = re.compile(r"^\*\s")

_HEADING_PREFIXES = (("#### ", 4), ("### ", 3), ("## ", 2), ("# ", 1))
_FENCE = "```"


class LineKind(str, Enum):
    SEPARATOR = "separator"
    TABLE = "table"
    FENCE = "fence"
    HEADING = "heading"
    BULLET = "bullet"
    BOLD_LINE = "bold_line"
    NUMBERED = "numbered"
    CHECK = "check"
    BLANK = "blank"
    TEXT = "text"


def classify_line(line: str) -> LineKind:
    """Classify one line; the first matching rule wins."""
    stripped = line.strip()
    if _SEPARATOR_LINE_RE.match(stripped):
        return LineKind.SEPARATOR
    if line.startswith("|"):
        return LineKind.TABLE
    if line.startswith(_FENCE):
        return LineKind.FENCE
    if _heading_level(line):
        return LineKind.HEADING
    if _BULLET_RE.match(line):
        return LineKind.BULLET
    if _BOLD_LINE_RE.match(stripped):
        return LineKind.BOLD_LINE
    if _NUMBERED_RE.match(line):
        return LineKind.NUMBERED
    if _CHECK_RE.match(line):
        return LineKind.CHECK
    if not stripped:
        return LineKind.BLANK
    return LineKind.TEXT


def _heading_level(line: str) -> int:
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return level
    return 0


def parse_inline(text: str) -> tuple[InlineSpan, ...]:
    """Split text into plain, bold, italic and code spans.

    A line made only of separator characters yields no spans.
    """
    if _INLINE_SEPARATOR_RE.match(text.strip()):
        return ()

    spans: list[InlineSpan] = []
    last = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > last:
            spans.append(PlainText(text[last:match.start()]))
        token = match.group(0)
        if token.startswith("**"):
            spans.append(Bold(token[2:-2]))
        elif token.startswith("`"):
            spans.append(Code(token[1:-1]))
        else:
            spans.append(Italic(token[1:-1]))
        last = match.end()
    if last < len(text):
        spans.append(PlainText(text[last:]))
    return tuple(spans)


def _split_row(row: str) -> list[str]:
    return [cell.strip() for cell in row.split("|") if cell.strip()]


class _NotesRenderer:
    """Single pass over the note lines with pending bullet/numbered groups."""

    def __init__(self, lines: list[str]):
        self._lines = lines
        self._pos = 0
        self.blocks: list[RenderBlock] = []
        self._bullets: list[tuple[InlineSpan, ...]] = []
        self._numbered: list[NumberedItem] = []

    def run(self) -> list[RenderBlock]:
        handlers = {
            LineKind.SEPARATOR: self._skip,
            LineKind.TABLE: self._table,
            LineKind.FENCE: self._code_block,
            LineKind.HEADING: self._heading,
            LineKind.BULLET: self._bullet,
            LineKind.BOLD_LINE: self._bold_line,
            LineKind.NUMBERED: self._numbered_item,
            LineKind.CHECK: self._check_line,
            LineKind.BLANK: self._blank,
            LineKind.TEXT: self._paragraph,
        }
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            handlers[classify_line(line)](line)
        self._flush()
        return self.blocks

    def _flush_bullets(self) -> None:
        if self._bullets:
            self.blocks.append(BulletList(tuple(self._bullets)))
            self._bullets = []

    def _flush_numbered(self) -> None:
        if self._numbered:
            self.blocks.append(NumberedList(tuple(self._numbered)))
            self._numbered = []

    def _flush(self) -> None:
        self._flush_bullets()
        self._flush_numbered()

    def _emit(self, block: RenderBlock) -> None:
        self._flush()
        self.blocks.append(block)

    def _skip(self, line: str) -> None:
        self._pos += 1

    def _table(self, line: str) -> None:
        self._flush()
        table_lines = []
        while self._pos < len(self._lines) and self._lines[self._pos].startswith("|"):
            table_lines.append(self._lines[self._pos])
            self._pos += 1
        rows = [row for row in table_lines if not _TABLE_RULE_RE.match(row)]
        if not rows:
            return
        headers = tuple(_split_row(rows[0]))
        body = tuple(
            tuple(parse_inline(cell) for cell in _split_row(row))
            for row in rows[1:]
        )
        self.blocks.append(Table(headers=headers, rows=body))

    def _code_block(self, line: str) -> None:
        self._flush()
        language = line[len(_FENCE):].strip() or None
        self._pos += 1
        code_lines = []
        while self._pos < len(self._lines) and not self._lines[self._pos].startswith(_FENCE):
            code_lines.append(self._lines[self._pos])
            self._pos += 1
        # closing fence
        self._pos += 1
        self.blocks.append(CodeBlock(lines=tuple(code_lines), language=language))

    def _heading(self, line: str) -> None:
        level = _heading_level(line)
        text = line.split(" ", 1)[1].replace("**", "").strip()
        self._emit(Heading(level=level, text=text))
        self._pos += 1

    def _bullet(self, line: str) -> None:
        self._flush_numbered()
        self._bullets.append(parse_inline(_BULLET_RE.sub("", line, count=1)))
        self._pos += 1

    def _bold_line(self, line: str) -> None:
        text = line.replace("**", "").strip().rstrip(":").strip()
        self._emit(Label(text))
        self._pos += 1

    def _numbered_item(self, line: str) -> None:
        self._flush_bullets()
        match = _NUMBERED_RE.match(line)
        self._numbered.append(NumberedItem(match.group(1), parse_inline(match.group(2))))
        self._pos += 1

    def _check_line(self, line: str) -> None:
        ok = _CHECK_RE.match(line).group(1) == "✓"
        self._emit(CheckLine(ok=ok, spans=parse_inline(_CHECK_RE.sub("", line, count=1))))
        self._pos += 1

    def _blank(self, line: str) -> None:
        self._emit(Blank())
        self._pos += 1

    def _paragraph(self, line: str) -> None:
        self._flush()
        cleaned = _LEADING_STAR_RE.sub("", line, count=1).strip()
        spans = parse_inline(cleaned) if cleaned else ()
        if spans:
            self.blocks.append(Paragraph(spans))
        self._pos += 1


def render_notes(text: Optional[str]) -> list[RenderBlock]:
    """Render full-notes text into display blocks. Empty text yields []."""
    if not text:
        return []
    return _NotesRenderer(text.split("\n")).run()


def split_transcript(text: str) -> list[str]:
    """Transcript paragraphs, split on blank lines."""
    return [para for para in (text or "").split("\n\n") if para.strip()]


def clean_key_point(text: str) -> str:
    return re.sub(r"^\*+\s*", "", text)


def split_definition(text: str) -> tuple[str, str]:
    """Split ``Term: meaning`` on the first ``": "``.

    Asterisks around the term are dropped; the meaning is empty when there
    is no separator.
    """
    term, *rest = text.split(": ")
    term = term.lstrip("*").rstrip("*")
    return term, ": ".join(rest)


def render_note(note: Note) -> RenderedNote:
    """Render every tab of a stored note."""
    return RenderedNote(
        blocks=tuple(render_notes(note.full_notes)),
        transcript=tuple(split_transcript(note.transcript)),
        key_points=tuple(clean_key_point(point) for point in note.key_points),
        definitions=tuple(split_definition(d) for d in note.definitions),
    )
