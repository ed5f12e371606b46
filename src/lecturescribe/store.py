"""JSON-file note store."""

import json
import os
import tempfile
import uuid
from dataclasses import fields, replace
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from .exceptions import NoteNotFoundError, StoreError
from .models import Note, SourceType

_IMMUTABLE_FIELDS = {"id", "date"}
_UPDATABLE_FIELDS = {f.name for f in fields(Note)} - _IMMUTABLE_FIELDS

SORT_MODES = ("newest", "oldest", "az", "za")


class NoteStore:
    """Notes kept newest first in a single JSON file.

    A missing file is an empty store. Every mutation rewrites the whole file
    through a temporary file in the same directory.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __len__(self) -> int:
        return len(self._load())

    def all(self) -> list[Note]:
        return self._load()

    def search(
        self,
        query: str = "",
        source: Optional[str] = None,
        sort: str = "newest",
    ) -> list[Note]:
        """Notes whose title or source info contains ``query``, ignoring case.

        ``source`` of None or "all" keeps every source type. ``sort`` is one
        of SORT_MODES; "az" and "za" order by title.
        """
        if sort not in SORT_MODES:
            raise StoreError(f"Unknown sort order: {sort}")
        needle = query.strip().casefold()
        notes = [
            note
            for note in self._load()
            if needle in note.title.casefold()
            or needle in note.source_info.casefold()
        ]
        if source and source != "all":
            try:
                wanted = SourceType(source)
            except ValueError:
                raise StoreError(f"Unknown source type: {source}") from None
            notes = [note for note in notes if note.source is wanted]

        if sort in ("az", "za"):
            notes.sort(key=lambda note: note.title.casefold(), reverse=sort == "za")
        else:
            notes.sort(
                key=lambda note: note.created_at.timestamp(),
                reverse=sort == "newest",
            )
        return notes

    def get(self, note_id: str) -> Optional[Note]:
        for note in self._load():
            if note.id == note_id:
                return note
        return None

    def require(self, note_id: str) -> Note:
        note = self.get(note_id)
        if note is None:
            raise NoteNotFoundError(f"No note with id '{note_id}'.")
        return note

    def add(self, note_data: dict) -> str:
        """Store a new note built from camelCase note data; returns its id."""
        data = dict(note_data)
        data["id"] = str(uuid.uuid4())
        data["date"] = datetime.now().isoformat()
        try:
            note = Note.from_dict(data)
        except (KeyError, ValueError) as e:
            raise StoreError(f"Invalid note data: {e}") from e
        notes = self._load()
        notes.insert(0, note)
        self._save(notes)
        return note.id

    def update(self, note_id: str, **changes) -> Note:
        """Patch fields of a stored note. ``id`` and ``date`` cannot change."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise StoreError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if "source" in changes:
            changes["source"] = SourceType(changes["source"])

        notes = self._load()
        for i, note in enumerate(notes):
            if note.id == note_id:
                notes[i] = replace(note, **changes)
                self._save(notes)
                return notes[i]
        raise NoteNotFoundError(f"No note with id '{note_id}'.")

    def delete(self, note_id: str) -> None:
        self.delete_many([note_id])

    def delete_many(self, note_ids: Iterable[str]) -> int:
        """Delete the given notes; returns how many were removed."""
        wanted = set(note_ids)
        notes = self._load()
        kept = [note for note in notes if note.id not in wanted]
        removed = len(notes) - len(kept)
        if removed:
            self._save(kept)
        return removed

    def clear(self) -> None:
        self._save([])

    def _load(self) -> list[Note]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [Note.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Cannot read note store {self.path}: {e}") from e

    def _save(self, notes: list[Note]) -> None:
        payload = json.dumps(
            [note.to_dict() for note in notes], indent=2, ensure_ascii=False
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".notes-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write note store {self.path}: {e}") from e
        logger.debug(f"Wrote {len(notes)} note(s) to {self.path}")
