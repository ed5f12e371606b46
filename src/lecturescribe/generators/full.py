"""Full study-notes generator: the four-section prompt."""

from ..models import GenerationMode
from .base import NoteGenerator

_RULE = "━" * 34


def _notes_skeleton(title: str) -> str:
    return (
        f"# {title}\n\n"
        "## Introduction\n"
        "- Clear explanation of the topic\n"
        "- Why it matters\n"
        "- Learning objectives\n\n"
        "## Core Concepts\n\n"
        "### Concept 1: [Name]\n"
        "Detailed explanation with what it is, why it's important, how it "
        "works and examples\n\n"
        "### Concept 2: [Name]\n"
        "Continue with more key concepts...\n\n"
        "## Practical Applications\n"
        "- Real-world uses\n"
        "- Examples of implementation\n\n"
        "## Step-by-Step Process (if applicable)\n"
        "1. First step with explanation\n"
        "2. Second step with details\n\n"
        "## Common Challenges & Solutions\n"
        "- Typical difficulties students face\n"
        "- Misconceptions to avoid\n\n"
        "## Study Tips & Exam Preparation\n"
        "- Practice recommendations\n"
        "- Quick review checklist\n\n"
        "## Summary Table\n"
        "| Concept | Description | Importance |\n"
        "|---------|-------------|------------|\n"
        "| [Concept] | [Brief desc] | [Why important] |\n\n"
        "## Quick Reference Guide\n"
        "**Main Ideas:**\n"
        "- Bullet point 1\n\n"
        "**Must Remember:**\n"
        "- Critical point 1\n\n"
        "**Common Mistakes:**\n"
        "- Mistake 1 and correction"
    )


class FullNotesGenerator(NoteGenerator):
    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.FULL

    def _system_prompt(self) -> str:
        return (
            "You are an expert educational content creator and study guide "
            "specialist. Write comprehensive, professional study notes as if "
            "teaching the subject directly. Do NOT mention videos, transcripts, "
            "or that you cannot access content.\n\n"
            "FORMATTING REQUIREMENTS:\n"
            "✓ Use proper markdown headings: #, ##, ###\n"
            "✓ Use hyphens (-) for bullet points, NOT asterisks (*)\n"
            "✓ Use numbered lists (1. 2. 3.) for steps\n"
            "✓ DO NOT use ** for bold; write terms plainly or emphasize "
            "with a colon (Term: description)\n"
            "✓ Add comparison tables where appropriate (use | pipes |)\n"
            "✓ Use code blocks for formulas if needed"
        )

    def _user_prompt(self, transcript: str, title: str) -> str:
        return (
            f"**Title:** \"{title}\"\n\n"
            f"**Source Material:**\n{transcript}\n\n"
            "**REQUIRED OUTPUT STRUCTURE:**\n\n"
            f"{_RULE}\n\n"
            "**SECTION 1: SUMMARY**\n"
            "Write 2-3 comprehensive paragraphs (200-300 words): what this "
            "topic is about, why it's important and the main concepts covered.\n\n"
            f"{_RULE}\n\n"
            "**SECTION 2: KEY POINTS**\n"
            "Provide 8-12 key points:\n"
            "- Start each line with a hyphen (-)\n"
            "- Each point should be a complete, informative sentence\n\n"
            f"{_RULE}\n\n"
            "**SECTION 3: DEFINITIONS**\n"
            "Provide 8-12 important terms.\n"
            "Format EXACTLY as: \"Term: Definition\"\n"
            "Example: \"Machine Learning: A branch of AI that enables systems "
            "to learn from data\"\n\n"
            f"{_RULE}\n\n"
            "**SECTION 4: FULL NOTES**\n"
            "Create comprehensive markdown study notes with this structure:\n\n"
            f"{_notes_skeleton(title)}\n\n"
            f"{_RULE}\n\n"
            "Generate the comprehensive study notes now, following this exact "
            "structure:"
        )
