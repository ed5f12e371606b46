"""Abstract base class for note generators."""

from abc import ABC, abstractmethod

from loguru import logger

from ..exceptions import TranscriptError
from ..llm.base import LLMProvider
from ..models import GenerationMode, ParsedNotes
from ..parser import parse_response
from ..utils import clean_transcript, estimate_tokens

MIN_TRANSCRIPT_CHARS = 50


class NoteGenerator(ABC):
    """Base class for the per-mode note generators.

    Subclasses define mode, _system_prompt and _user_prompt. The raw response
    always goes through ``parse_response``, whatever the mode asked for.
    """

    def __init__(self, llm: LLMProvider):
        self._llm = llm

    @property
    @abstractmethod
    def mode(self) -> GenerationMode:
        """Prompt variant this generator produces."""

    @abstractmethod
    def _system_prompt(self) -> str:
        """System prompt for the LLM."""

    @abstractmethod
    def _user_prompt(self, transcript: str, title: str) -> str:
        """User prompt for the LLM."""

    @property
    def _max_output_tokens(self) -> int:
        """Max output tokens per LLM call. Override for different limits."""
        return self._llm.default_max_output_tokens

    def generate(self, transcript: str, title: str) -> ParsedNotes:
        """Generate structured notes for a lecture transcript.

        Args:
            transcript: Lecture transcript or topic text.
            title: Lecture title, used in the prompt and parser defaults.

        Raises TranscriptError if the transcript is empty or too short.
        """
        transcript = clean_transcript(transcript or "")
        if len(transcript) < MIN_TRANSCRIPT_CHARS:
            raise TranscriptError(
                f"Transcript is too short to generate notes "
                f"({len(transcript)} chars, need {MIN_TRANSCRIPT_CHARS})."
            )

        content = self._fit_content_to_context(transcript, self._system_prompt())
        logger.debug(
            f"Generating '{title}' notes, mode: {self.mode.value}, "
            f"transcript length: {len(content)} chars"
        )
        raw = self._llm.generate(
            self._system_prompt(),
            self._user_prompt(content, title),
            max_output_tokens=self._max_output_tokens,
        )
        logger.debug(f"Generated content length: {len(raw or '')} chars")
        return parse_response(raw or "", title, self.mode)

    def _fit_content_to_context(self, content: str, *other_parts: str) -> str:
        """Truncate content so that content + other_parts fit in the context window."""
        # Reserve tokens for the prompt scaffolding and output generation
        overhead = 10_000
        other_tokens = sum(estimate_tokens(p) for p in other_parts)
        available = self._llm.max_input_tokens - overhead - other_tokens

        if available <= 0:
            available = 10_000  # minimum floor

        if estimate_tokens(content) <= available:
            return content

        max_chars = available * 4
        truncated = content[:max_chars]
        # Try to cut at a paragraph boundary
        last_para = truncated.rfind("\n\n")
        if last_para > max_chars // 2:
            truncated = truncated[:last_para]
        logger.warning(
            f"Transcript truncated from {len(content)} to {len(truncated)} chars"
        )
        return truncated + "\n\n[Transcript truncated to fit context window]"
