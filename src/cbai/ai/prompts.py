"""Prompt templates for the built-in text operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    """System prompt plus a user prompt with ``{CONTEXT}`` placeholder."""

    system: str
    user: str

    def render(self, text: str, *, language: str = "") -> tuple[str, str]:
        """Return ``(user_prompt, system_prompt)`` for the given input text."""
        # Substitute the language first so clipboard text is never re-scanned.
        prompt = self.user.replace("{LANGUAGE}", language).replace("{CONTEXT}", text)
        return prompt, self.system


SUMMARIZE = PromptTemplate(
    system="You are a helpful assistant that provides clear, concise summaries.",
    user="Summarize the following text concisely:\n\n{CONTEXT}",
)

EXPLAIN = PromptTemplate(
    system=(
        "You are a helpful assistant that explains things clearly. "
        "If this looks like code, explain what it does."
    ),
    user="Explain the following:\n\n{CONTEXT}",
)

TRANSLATE = PromptTemplate(
    system="You are a translator. Only output the translation, nothing else.",
    user="Translate the following to {LANGUAGE}:\n\n{CONTEXT}",
)

IMPROVE = PromptTemplate(
    system=(
        "You are an editor. Improve the text while preserving its meaning. "
        "Only output the improved text."
    ),
    user="Improve the following writing for clarity and style:\n\n{CONTEXT}",
)

EXTRACT = PromptTemplate(
    system="You are a data extraction assistant. Extract key information in a structured format.",
    user="Extract structured data from the following text. Output as JSON if applicable:\n\n{CONTEXT}",
)

TLDR = PromptTemplate(
    system="You provide extremely brief summaries. Be concise.",
    user="Give a very brief TL;DR (1-2 sentences max) of this:\n\n{CONTEXT}",
)

CLASSIFY = PromptTemplate(
    system=(
        "You are a content classifier. Categorize the given text into exactly one of these "
        "categories: email, code, url, log, article, chat, command, data, error, other. "
        'Respond with JSON only: {"category": "...", "confidence": 0.0-1.0, "reasoning": "..."}'
    ),
    user="Classify this content:\n\n{CONTEXT}",
)
