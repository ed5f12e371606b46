"""Decompose a free-text generation response into structured note fields.

The response is produced against a structured prompt but nothing guarantees
the model followed it. A single forward pass assigns lines to the section
named by the most recent header-like line; each field then has its own
fallback tier that rescans the whole response, and finally a title-derived
default. ``parse_response`` never raises.
"""

import re
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from .models import GenerationMode, ParsedNotes

MAX_SUMMARY_CHARS = 1500
MAX_KEY_POINTS = 15
MAX_DEFINITIONS = 12


class Section(str, Enum):
    NONE = "none"
    SUMMARY = "summary"
    KEY_POINTS = "keypoints"
    DEFINITIONS = "definitions"
    FULL_NOTES = "fullnotes"


# Checked in order; the first section whose keyword appears wins.
_SECTION_KEYWORDS: tuple[tuple[Section, tuple[str, ...]], ...] = (
    (Section.SUMMARY, ("summary", "overview", "section 1")),
    (Section.KEY_POINTS, ("key point", "main point", "key takeaway", "section 2")),
    (Section.DEFINITIONS, ("definition", "key term", "terminology", "section 3")),
    (Section.FULL_NOTES, ("full note", "detailed note", "comprehensive note", "section 4")),
)

_MAX_HEADER_CHARS = 100

_SEPARATOR_RE = re.compile(r"^[━─=\-_]{3,}$")
_NUMBERED_RE = re.compile(r"^\d+\.")
_MARKER_RE = re.compile(r"^[\d\-*•.)\s]+")
_BULLET_MARKER_RE = re.compile(r"^[\-*•\s]+")
_CAPITALIZED_RE = re.compile(r"^[A-Z][a-z]")
_TOP_HEADING_RE = re.compile(r"^\s*#{1,2}\s", re.MULTILINE)

_BULLET_PREFIXES = ("-", "*", "•")

_DEFAULT_KEY_POINTS = [
    "Core concepts and fundamental principles explained in detail",
    "Practical examples and real-world applications demonstrated",
    "Key terminology, definitions, and technical vocabulary covered",
    "Important relationships and connections between concepts",
    "Problem-solving approaches and methodologies discussed",
]


def is_separator(line: str) -> bool:
    """True for decorative rules such as ``━━━━`` or ``-----``."""
    return bool(_SEPARATOR_RE.match(line.strip()))


def detect_section(line: str) -> Optional[Section]:
    """Return the section a short header-like line announces, if any."""
    if len(line) >= _MAX_HEADER_CHARS:
        return None
    lower = line.lower()
    for section, keywords in _SECTION_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return section
    return None


def _strip_marker(line: str) -> str:
    return _MARKER_RE.sub("", line).strip()


def _summary_line(line: str) -> Optional[str]:
    if (
        line.startswith("#")
        or line.startswith("**")
        or _NUMBERED_RE.match(line)
        or line.lower().startswith("section")
        or len(line) <= 20
    ):
        return None
    return line


def _key_point_line(line: str) -> Optional[str]:
    if not (line.startswith(_BULLET_PREFIXES) or _NUMBERED_RE.match(line)):
        return None
    cleaned = _strip_marker(line)
    if len(cleaned) <= 15 or "key point" in cleaned.lower():
        return None
    return cleaned


def _definition_line(line: str) -> Optional[str]:
    if ":" not in line or line.startswith("#"):
        return None
    cleaned = _strip_marker(line)
    lower = cleaned.lower()
    if not 25 <= len(cleaned) < 300:
        return None
    if lower.startswith("definition") or "section" in lower:
        return None
    return cleaned


_LINE_HANDLERS: dict[Section, Callable[[str], Optional[str]]] = {
    Section.SUMMARY: _summary_line,
    Section.KEY_POINTS: _key_point_line,
    Section.DEFINITIONS: _definition_line,
}


class _SectionScanner:
    """Single forward pass over the response lines.

    Entering FULL_NOTES is terminal: every later line, header-like or not,
    belongs to the notes document.
    """

    def __init__(self):
        self.section = Section.NONE
        self.buffers: dict[Section, list[str]] = {
            Section.SUMMARY: [],
            Section.KEY_POINTS: [],
            Section.DEFINITIONS: [],
            Section.FULL_NOTES: [],
        }
        self.entered_full_notes = False
        # Non-empty lines seen before the notes capture began.
        self.head_lines: list[str] = []

    def feed(self, raw_line: str) -> None:
        if self.section is Section.FULL_NOTES:
            if not is_separator(raw_line):
                self.buffers[Section.FULL_NOTES].append(raw_line.rstrip())
            return

        line = raw_line.strip()
        if not line:
            return
        self.head_lines.append(line)

        header = detect_section(line)
        if header is not None:
            self.section = header
            self.buffers[header] = []
            if header is Section.FULL_NOTES:
                self.entered_full_notes = True
            return

        if is_separator(line):
            return

        handler = _LINE_HANDLERS.get(self.section)
        if handler is None:
            return
        accepted = handler(line)
        if accepted is not None:
            self.buffers[self.section].append(accepted)


def _fallback_summary(response: str) -> str:
    """First substantial prose paragraphs anywhere in the response."""
    paragraphs = []
    for paragraph in response.split("\n\n"):
        trimmed = paragraph.strip()
        lower = trimmed.lower()
        if not 80 <= len(trimmed) < 2000:
            continue
        if trimmed.startswith("#"):
            continue
        if "━" in trimmed or "─" in trimmed:
            continue
        if any(is_separator(line) for line in trimmed.splitlines()):
            continue
        if any(f"section {n}" in lower for n in (2, 3, 4)):
            continue
        if lower.startswith("**key point") or lower.startswith("**definition"):
            continue
        paragraphs.append(trimmed)
    return "\n\n".join(paragraphs[:3]).strip()[:MAX_SUMMARY_CHARS]


def _fallback_key_points(lines: list[str]) -> list[str]:
    points = []
    for line in lines:
        lower = line.lower()
        if not line.startswith(_BULLET_PREFIXES) or is_separator(line):
            continue
        if not 20 <= len(line) < 500:
            continue
        if "summary" in lower or "section" in lower:
            continue
        points.append(_BULLET_MARKER_RE.sub("", line).strip())
    return points[:MAX_KEY_POINTS]


def _fallback_definitions(lines: list[str]) -> list[str]:
    definitions = []
    for line in lines:
        lower = line.lower()
        if ":" not in line or not 25 <= len(line) < 300:
            continue
        if "transcript" in lower or "source" in lower or "section" in lower:
            continue
        if not (_CAPITALIZED_RE.match(line) or line.startswith(_BULLET_PREFIXES)):
            continue
        definitions.append(_BULLET_MARKER_RE.sub("", line).strip())
    return definitions[:MAX_DEFINITIONS]


def default_summary(title: str) -> str:
    return (
        f"This comprehensive study guide covers {title}, providing detailed "
        "explanations of core concepts, practical applications, and key "
        "terminology. The material is designed to help students understand "
        "the fundamental principles and develop a strong foundation in the "
        "subject matter."
    )


def default_definitions(title: str) -> list[str]:
    return [
        f"{title}: The primary subject matter of this educational content",
        "Core Concepts: Fundamental ideas and principles explored throughout",
        "Key Terms: Essential vocabulary and terminology related to the topic",
    ]


def ensure_title_heading(full_notes: str, title: str) -> str:
    """Prepend ``# title`` unless the notes already carry a # or ## heading."""
    if _TOP_HEADING_RE.search(full_notes):
        return full_notes
    return f"# {title}\n\n{full_notes}".strip()


def parse_response(
    response: str,
    title: str,
    mode: GenerationMode = GenerationMode.FULL,
) -> ParsedNotes:
    """Parse a raw generation response into ``ParsedNotes``.

    Args:
        response: Unstructured text returned by the text-generation service.
        title: Lecture title, used for the synthesized heading and defaults.
        mode: Prompt variant the response was produced with.

    Every field of the result is non-empty, whatever the input.
    """
    response = response or ""
    mode = GenerationMode(mode)
    scanner = _SectionScanner()
    for raw_line in response.splitlines():
        scanner.feed(raw_line)

    # Line fallbacks never reach into the captured notes document.
    lines = scanner.head_lines
    buffers = scanner.buffers

    summary = " ".join(buffers[Section.SUMMARY]).strip()[:MAX_SUMMARY_CHARS]
    if len(summary) < 100:
        summary = _fallback_summary(response)
        logger.debug(f"[{mode.value}] summary fallback found {len(summary)} chars")

    key_points = list(buffers[Section.KEY_POINTS])
    if not key_points:
        key_points = _fallback_key_points(lines)
        logger.debug(f"[{mode.value}] key points fallback found {len(key_points)}")

    definitions = list(buffers[Section.DEFINITIONS])
    if not definitions:
        definitions = _fallback_definitions(lines)
        logger.debug(f"[{mode.value}] definitions fallback found {len(definitions)}")

    if scanner.entered_full_notes:
        full_notes = "\n".join(buffers[Section.FULL_NOTES]).strip()
    else:
        full_notes = response.strip()
    full_notes = ensure_title_heading(full_notes, title)

    summary = summary.strip()[:MAX_SUMMARY_CHARS]
    key_points = [p for p in key_points[:MAX_KEY_POINTS] if len(p) > 10]
    definitions = [d for d in definitions[:MAX_DEFINITIONS] if ":" in d]

    if len(summary) < 50:
        logger.debug(f"[{mode.value}] using default summary for '{title}'")
        summary = default_summary(title)
    if not key_points:
        logger.debug(f"[{mode.value}] using default key points for '{title}'")
        key_points = list(_DEFAULT_KEY_POINTS)
    if not definitions:
        logger.debug(f"[{mode.value}] using default definitions for '{title}'")
        definitions = default_definitions(title)

    return ParsedNotes(
        summary=summary,
        key_points=key_points,
        definitions=definitions,
        full_notes=full_notes,
    )
