"""Data models for lecturescribe."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class GenerationMode(str, Enum):
    """Prompt variant used to produce a raw response."""

    SUMMARY = "summary"
    FULL = "full"
    KEY_CONCEPTS = "key-concepts"


class SourceType(str, Enum):
    """Where a lecture came from."""

    AUDIO = "audio"
    VIDEO = "video"
    LINK = "link"


@dataclass
class ParsedNotes:
    """Structured fields extracted from a free-text generation response."""

    summary: str
    key_points: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=list)
    full_notes: str = ""


@dataclass
class Note:
    """A stored lecture note."""

    id: str
    title: str
    date: str  # ISO-8601 creation timestamp
    source: SourceType
    source_info: str  # filename or URL
    transcript: str
    summary: str
    key_points: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=list)
    full_notes: str = ""

    @property
    def created_at(self) -> datetime:
        # fromisoformat only accepts a trailing "Z" from Python 3.11
        date = self.date[:-1] + "+00:00" if self.date.endswith("Z") else self.date
        return datetime.fromisoformat(date)

    def to_dict(self) -> dict:
        """Serialize using the camelCase keys of the stored JSON."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "source": self.source.value,
            "sourceInfo": self.source_info,
            "transcript": self.transcript,
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "definitions": list(self.definitions),
            "fullNotes": self.full_notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        return cls(
            id=data["id"],
            title=data["title"],
            date=data["date"],
            source=SourceType(data.get("source", SourceType.AUDIO.value)),
            source_info=data.get("sourceInfo", ""),
            transcript=data.get("transcript", ""),
            summary=data.get("summary", ""),
            key_points=list(data.get("keyPoints", [])),
            definitions=list(data.get("definitions", [])),
            full_notes=data.get("fullNotes", ""),
        )
