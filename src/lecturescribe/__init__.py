"""Structured study notes from lecture transcripts."""

from .models import GenerationMode, Note, ParsedNotes, SourceType
from .parser import parse_response
from .renderer import parse_inline, render_note, render_notes

__version__ = "0.1.0"

__all__ = [
    "GenerationMode",
    "Note",
    "ParsedNotes",
    "SourceType",
    "parse_inline",
    "parse_response",
    "render_note",
    "render_notes",
]
