import json
from typing import Optional

import pytest

from lecturescribe.llm.base import LLMProvider
from lecturescribe.store import NoteStore

FULL_RESPONSE = """\
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

**SECTION 1: SUMMARY**
Photosynthesis is the process by which green plants convert light energy into chemical energy stored in glucose.
It takes place in the chloroplasts and depends on chlorophyll to capture sunlight efficiently.

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

**SECTION 2: KEY POINTS**
- Light-dependent reactions happen in the thylakoid membranes
- The Calvin cycle fixes carbon dioxide into sugar molecules
- Oxygen is released as a by-product of splitting water

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

**SECTION 3: DEFINITIONS**
Chlorophyll: The green pigment that absorbs light for photosynthesis
Stomata: Small pores on leaves that allow gas exchange with the air

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

**SECTION 4: FULL NOTES**
# Photosynthesis

## Introduction
- Plants make their own food
- Sunlight drives the process

## Summary Table
| Stage | Location |
|-------|----------|
| Light reactions | Thylakoid |
"""


class FakeLLM(LLMProvider):
    """Returns canned text and records every prompt it receives."""

    def __init__(self, response: str = FULL_RESPONSE, max_input: int = 100_000):
        self.response = response
        self.calls: list[tuple[str, str, Optional[int]]] = []
        self._max_input = max_input

    def generate(self, system_prompt, user_prompt, max_output_tokens=None) -> str:
        self.calls.append((system_prompt, user_prompt, max_output_tokens))
        return self.response

    @property
    def max_input_tokens(self) -> int:
        return self._max_input

    @property
    def default_max_output_tokens(self) -> int:
        return 4_096


@pytest.fixture
def full_response():
    return FULL_RESPONSE


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "notes.json"


@pytest.fixture
def store(store_path):
    return NoteStore(store_path)


@pytest.fixture
def transcript():
    return (
        "Today we are going to talk about photosynthesis. Plants take in "
        "carbon dioxide and water and, using the energy of sunlight, turn "
        "them into glucose and oxygen.\n\n"
        "The first stage is the light-dependent reactions, and the second "
        "stage is the Calvin cycle."
    )


@pytest.fixture
def note_data():
    return {
        "title": "Photosynthesis",
        "source": "audio",
        "sourceInfo": "lecture-01.mp3",
        "transcript": "First paragraph.\n\nSecond paragraph.",
        "summary": "Plants turn light into chemical energy.",
        "keyPoints": ["** Light reactions happen in thylakoids"],
        "definitions": ["**Chlorophyll**: Green pigment: absorbs light"],
        "fullNotes": "# Photosynthesis\n\n- Plants make food",
    }


@pytest.fixture
def library(store_path, note_data):
    """Three stored notes with fixed dates, written out of date order."""
    notes = [
        {**note_data, "id": "cells", "title": "Cell Biology", "source": "video",
         "sourceInfo": "https://youtube.com/watch?v=abc", "date": "2026-01-01T09:00:00"},
        {**note_data, "id": "photo", "date": "2026-01-03T09:00:00"},
        {**note_data, "id": "algebra", "title": "algebra basics", "source": "link",
         "sourceInfo": "https://example.com/photo-notes", "date": "2026-01-02T09:00:00Z"},
    ]
    store_path.write_text(json.dumps(notes), encoding="utf-8")
    return NoteStore(store_path)
