"""Generator registry and note assembly."""

from typing import Union

from ..llm.base import LLMProvider
from ..models import GenerationMode, ParsedNotes, SourceType
from .base import NoteGenerator
from .full import FullNotesGenerator
from .key_concepts import KeyConceptsGenerator
from .summary import SummaryGenerator

_GENERATORS: dict[GenerationMode, type[NoteGenerator]] = {
    GenerationMode.SUMMARY: SummaryGenerator,
    GenerationMode.FULL: FullNotesGenerator,
    GenerationMode.KEY_CONCEPTS: KeyConceptsGenerator,
}


def get_generator(mode: Union[GenerationMode, str], llm: LLMProvider) -> NoteGenerator:
    """Return the generator for a generation mode."""
    return _GENERATORS[GenerationMode(mode)](llm)


def create_note(
    parsed: ParsedNotes,
    title: str,
    source: Union[SourceType, str],
    source_info: str,
    transcript: str,
) -> dict:
    """Merge parsed fields with the lecture metadata into store-ready note data.

    The store assigns ``id`` and ``date`` when the note is added.
    """
    return {
        "title": title,
        "source": SourceType(source).value,
        "sourceInfo": source_info,
        "transcript": transcript,
        "summary": parsed.summary,
        "keyPoints": list(parsed.key_points),
        "definitions": list(parsed.definitions),
        "fullNotes": parsed.full_notes,
    }


__all__ = [
    "FullNotesGenerator",
    "KeyConceptsGenerator",
    "NoteGenerator",
    "SummaryGenerator",
    "create_note",
    "get_generator",
]
