"""Shared typed contracts for provider responses."""

from __future__ import annotations

from typing import TypedDict


class TokenUsage(TypedDict, total=False):
    """Token usage metadata returned by providers."""

    prompt_tokens: int
    completion_tokens: int


class AIResponse(TypedDict, total=False):
    """One completed generation."""

    content: str
    model: str
    usage: TokenUsage
