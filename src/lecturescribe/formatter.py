"""Terminal display of rendered notes, and the text/markdown exports."""

from datetime import datetime
from typing import Iterable, Optional

import click

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
    NumberedList,
    Paragraph,
    RenderBlock,
    Table,
    spans_text,
)
from .models import Note


def format_spans(spans: Iterable[InlineSpan], color: bool = False) -> str:
    """Join inline spans, styling them with ANSI codes when ``color`` is set."""
    if not color:
        return "".join(span.text for span in spans)
    parts = []
    for span in spans:
        if isinstance(span, Bold):
            parts.append(click.style(span.text, bold=True))
        elif isinstance(span, Italic):
            parts.append(click.style(span.text, italic=True))
        elif isinstance(span, Code):
            parts.append(click.style(span.text, fg="cyan"))
        else:
            parts.append(span.text)
    return "".join(parts)


def _format_heading(block: Heading, color: bool) -> list[str]:
    text = block.text
    if block.level == 1:
        lines = [text, "=" * len(text)]
    elif block.level == 2:
        lines = [text, "-" * len(text)]
    elif block.level == 3:
        lines = [f"▸ {text}"]
    else:
        lines = [text.upper()]
    if color:
        lines[0] = click.style(lines[0], bold=True, fg="blue" if block.level <= 2 else None)
    return lines


def _format_table(block: Table, color: bool) -> list[str]:
    rows = [list(block.headers)] + [
        [spans_text(cell) for cell in row] for row in block.rows
    ]
    width = max(len(row) for row in rows)
    widths = [
        max((len(row[col]) for row in rows if col < len(row)), default=0)
        for col in range(width)
    ]

    def line(cells: list[str]) -> str:
        padded = [
            (cells[col] if col < len(cells) else "").ljust(widths[col])
            for col in range(width)
        ]
        return "| " + " | ".join(padded) + " |"

    header = line(rows[0])
    if color:
        header = click.style(header, bold=True)
    rule = "|" + "|".join("-" * (w + 2) for w in widths) + "|"
    return [header, rule] + [line(row) for row in rows[1:]]


def format_block(block: RenderBlock, color: bool = False) -> list[str]:
    """Terminal lines for one render block."""
    if isinstance(block, Heading):
        return _format_heading(block, color)
    if isinstance(block, Label):
        text = f"{block.text}:"
        return [click.style(text, bold=True) if color else text]
    if isinstance(block, Paragraph):
        return [format_spans(block.spans, color)]
    if isinstance(block, BulletList):
        return [f"  • {format_spans(item, color)}" for item in block.items]
    if isinstance(block, NumberedList):
        return [
            f"  {item.label}. {format_spans(item.spans, color)}"
            for item in block.items
        ]
    if isinstance(block, Table):
        return _format_table(block, color)
    if isinstance(block, CodeBlock):
        return [f"    {line}" for line in block.lines]
    if isinstance(block, CheckLine):
        mark = "✓" if block.ok else "✗"
        if color:
            mark = click.style(mark, fg="green" if block.ok else "red")
        return [f"{mark} {format_spans(block.spans, color)}"]
    if isinstance(block, Blank):
        return [""]
    raise TypeError(f"Unknown render block: {block!r}")


def format_blocks(blocks: Iterable[RenderBlock], color: bool = False) -> str:
    """Render a block sequence as terminal text."""
    lines: list[str] = []
    for block in blocks:
        lines.extend(format_block(block, color))
    return "\n".join(lines)


def export_text(note: Note) -> str:
    """The plain-text download of a note."""
    key_points = "\n".join(f"• {p}" for p in note.key_points)
    definitions = "\n".join(f"• {d}" for d in note.definitions)
    return (
        f"{note.title}\n{'=' * len(note.title)}\n\n"
        f"Date: {note.created_at.strftime('%Y-%m-%d')}\n"
        f"Source: {note.source_info}\n\n"
        f"---\n\nFULL NOTES\n\n{note.full_notes}\n\n"
        f"---\n\nTRANSCRIPT\n\n{note.transcript}\n\n"
        f"---\n\nKEY POINTS\n\n{key_points}\n\n"
        f"---\n\nDEFINITIONS\n\n{definitions}"
    )


def format_frontmatter(note: Note, created: Optional[datetime] = None) -> str:
    """Generate YAML frontmatter for a note."""
    created = created or note.created_at
    lines = [
        "---",
        f"title: \"{_escape_yaml(note.title)}\"",
        f"source: {note.source.value}",
        f"sourceInfo: \"{_escape_yaml(note.source_info)}\"",
        f"date: {created.strftime('%Y-%m-%d')}",
        "tags:",
        "  - lecturescribe",
        f"  - {note.source.value}",
        "---",
    ]
    return "\n".join(lines)


def format_markdown(note: Note) -> str:
    """Format a note as a markdown document with frontmatter."""
    parts = [format_frontmatter(note), "", note.full_notes.strip(), ""]
    parts.append("## Key Points")
    parts.append("")
    parts.extend(f"- {point}" for point in note.key_points)
    parts.append("")
    parts.append("## Definitions")
    parts.append("")
    parts.extend(f"- {definition}" for definition in note.definitions)
    return "\n".join(parts) + "\n"


def _escape_yaml(text: str) -> str:
    """Escape special characters for YAML string values."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", " ")
    return text
