"""Summary-only note generator."""

from ..models import GenerationMode
from .base import NoteGenerator


class SummaryGenerator(NoteGenerator):
    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.SUMMARY

    def _system_prompt(self) -> str:
        return (
            "You are an expert educational assistant. You write clear, "
            "well-structured summaries of lectures for students. Write in an "
            "educational, informative tone and never say you cannot access "
            "the content."
        )

    def _user_prompt(self, transcript: str, title: str) -> str:
        return (
            "Create a concise but comprehensive summary of the following "
            f"lecture/content titled \"{title}\".\n\n"
            f"**Content:**\n{transcript}\n\n"
            "**Requirements:**\n"
            "- Write 2-3 well-structured paragraphs (150-250 words total)\n"
            "- Focus on the main ideas and key takeaways\n"
            "- Make it clear and easy to understand\n"
            "- Highlight the most important concepts\n\n"
            "Provide only the summary, nothing else."
        )
