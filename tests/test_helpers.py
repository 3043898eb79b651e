"""Shared test helpers for cbai tests."""

from __future__ import annotations

from typing import Any, Optional


def make_config(
    provider_type: str = "ollama",
    *,
    model: str = "mistral",
    endpoint: str = "",
    api_key: Optional[str] = None,
    safe_mode: bool = False,
    actions: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Build an agent configuration response for tests."""
    provider: dict[str, Any] = {"type": provider_type, "endpoint": endpoint, "model": model}
    if api_key is not None:
        provider["api_key"] = api_key
    return {
        "provider": provider,
        "actions": actions or {},
        "settings": {
            "poll_interval": 150,
            "safe_mode": safe_mode,
            "notifications": True,
            "log_level": "info",
        },
    }


class FakeAI:
    """Stand-in for ``AIClient`` that records calls and returns canned text."""

    def __init__(self, reply: str = "fake output"):
        self.reply = reply
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def _respond(self, name: str, *args: Any) -> str:
        self.calls.append((name, args))
        return self.reply

    async def summarize(self, text: str) -> str:
        return await self._respond("summarize", text)

    async def explain(self, text: str) -> str:
        return await self._respond("explain", text)

    async def translate(self, text: str, target_language: str) -> str:
        return await self._respond("translate", text, target_language)

    async def improve(self, text: str) -> str:
        return await self._respond("improve", text)

    async def extract_data(self, text: str) -> str:
        return await self._respond("extract_data", text)

    async def classify(self, text: str) -> str:
        return await self._respond("classify", text)

    async def tldr(self, text: str) -> str:
        return await self._respond("tldr", text)
