"""Custom exceptions for lecturescribe."""


class LectureScribeError(Exception):
    """Base exception for lecturescribe."""


class ConfigError(LectureScribeError):
    """Raised when configuration is missing or invalid."""


class LLMError(LectureScribeError):
    """Raised when LLM API calls fail."""


class TranscriptError(LectureScribeError):
    """Raised when a transcript is missing or too short to generate notes."""


class StoreError(LectureScribeError):
    """Raised when the note store cannot be read or written."""


class NoteNotFoundError(StoreError):
    """Raised when a note id is not present in the store."""
