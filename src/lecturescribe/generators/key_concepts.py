"""Key-concepts note generator: summary, key points and definitions."""

from ..models import GenerationMode
from .base import NoteGenerator


class KeyConceptsGenerator(NoteGenerator):
    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.KEY_CONCEPTS

    def _system_prompt(self) -> str:
        return (
            "You are an expert educational assistant. You extract the key "
            "concepts, important terms and definitions from lecture material. "
            "Be specific, educational and helpful. Never say you cannot access "
            "the content."
        )

    def _user_prompt(self, transcript: str, title: str) -> str:
        return (
            "Extract the key concepts, important terms, and definitions from "
            f"the following content titled \"{title}\".\n\n"
            f"**Content:**\n{transcript}\n\n"
            "Provide the following in a CLEARLY STRUCTURED format:\n\n"
            "1. **SUMMARY** (1-2 paragraphs):\n"
            "Brief overview of the main topic and its importance\n\n"
            "2. **KEY POINTS** (7-10 bullet points):\n"
            "- Start each line with a hyphen (-)\n"
            "- Make each point specific and informative\n"
            "- Each point should be a complete thought\n\n"
            "3. **DEFINITIONS** (6-8 terms):\n"
            "Format EXACTLY as: \"Term: Clear definition\"\n"
            "Example: \"Algorithm: A step-by-step procedure for solving a problem\""
        )
