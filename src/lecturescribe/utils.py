"""Utility functions for lecturescribe."""

import re


def slugify(text: str, max_length: int = 80) -> str:
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")
    if len(text) > max_length:
        text = text[:max_length].rstrip("-")
    return text or "untitled"


def export_filename(title: str) -> str:
    """Download filename for the plain-text export."""
    return re.sub(r"\s+", "-", title).lower() + ".txt"


def estimate_tokens(text: str) -> int:
    """Rough token estimate (~4 chars per token for English)."""
    return len(text) // 4


def clean_transcript(text: str) -> str:
    """Strip a leading ``transcription:`` or ``begin transcription:`` label."""
    text = text.strip()
    text = re.sub(r"^\s*transcription:?\s*", "", text, flags=re.IGNORECASE)
    text = re.sub(r"^\s*begin transcription:?\s*", "", text, flags=re.IGNORECASE)
    return text.strip()
