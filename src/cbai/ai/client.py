"""Provider client handed to actions as ``ctx.ai``."""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

from ..constants import AI_REQUEST_TIMEOUT_SEC
from ..domain.config import ProviderConfig
from ..errors import UnsupportedProviderError
from ..logging import extract_http_error_context, log_event
from . import prompts
from .types import AIResponse

OLLAMA_DEFAULT_ENDPOINT = "http://localhost:11434/v1"

DEFAULT_ENDPOINTS: dict[str, str] = {
    "ollama": OLLAMA_DEFAULT_ENDPOINT,
    "openai": "https://api.openai.com/v1",
    "anthropic": "https://api.anthropic.com/v1",
}

# OpenAI-compatible local servers ignore the key but the SDK requires one.
LOCAL_PLACEHOLDER_API_KEY = "dummy-key-for-local"

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024


class CompletionProvider(Protocol):
    """Structural interface shared by the provider backends."""

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int,
        temperature: float,
    ) -> AIResponse:
        ...


def resolve_endpoint(config: ProviderConfig) -> str:
    """Return the configured endpoint, else the per-type default."""
    if config.endpoint:
        return config.endpoint
    return DEFAULT_ENDPOINTS.get(config.type, OLLAMA_DEFAULT_ENDPOINT)


def build_provider(config: ProviderConfig, timeout: float = AI_REQUEST_TIMEOUT_SEC) -> CompletionProvider:
    """Instantiate the backend matching the provider type."""
    if config.type == "anthropic":
        if not config.api_key:
            raise UnsupportedProviderError(
                'Provider type "anthropic" requires an api_key in the agent configuration.'
            )
        from .anthropic_provider import AnthropicProvider

        return AnthropicProvider(config.api_key, endpoint=config.endpoint, timeout=timeout)

    from .openai_provider import OpenAICompatibleProvider

    return OpenAICompatibleProvider(
        resolve_endpoint(config),
        config.api_key or LOCAL_PLACEHOLDER_API_KEY,
        timeout=timeout,
    )


class AIClient:
    """One-shot prompt/response wrapper bound to one provider configuration."""

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = AI_REQUEST_TIMEOUT_SEC,
        provider: Optional[CompletionProvider] = None,
    ):
        """Initialize the client.

        Args:
            config: Provider settings from the agent configuration
            timeout: Request timeout in seconds
            provider: Optional backend override (used by tests)

        Raises:
            UnsupportedProviderError: If the configuration cannot produce a backend
        """
        self.config = config
        self.model = config.model
        self.endpoint = resolve_endpoint(config)
        self._provider = provider if provider is not None else build_provider(config, timeout)

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> AIResponse:
        """Send one prompt and return the completed response."""
        log_event(
            "ai_request",
            level=logging.INFO,
            provider=self.config.type,
            model=self.model,
            endpoint=self.endpoint,
            input_chars=len(prompt),
            has_system_prompt=bool(system_prompt),
        )
        started = time.perf_counter()
        try:
            response = await self._provider.complete(
                model=self.model,
                prompt=prompt,
                system_prompt=system_prompt,
                max_tokens=DEFAULT_MAX_TOKENS,
                temperature=DEFAULT_TEMPERATURE,
            )
        except Exception as e:
            log_event(
                "ai_error",
                level=logging.ERROR,
                provider=self.config.type,
                model=self.model,
                latency_ms=round((time.perf_counter() - started) * 1000, 1),
                error_type=type(e).__name__,
                error=str(e),
                **extract_http_error_context(e),
            )
            raise

        usage = response.get("usage", {})
        log_event(
            "ai_response",
            level=logging.INFO,
            provider=self.config.type,
            model=response.get("model", self.model),
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
            output_chars=len(response.get("content", "")),
            input_tokens=usage.get("prompt_tokens"),
            output_tokens=usage.get("completion_tokens"),
        )
        return response

    async def _run_template(self, template: prompts.PromptTemplate, text: str, **values: str) -> str:
        prompt, system_prompt = template.render(text, **values)
        response = await self.generate(prompt, system_prompt)
        return response.get("content", "")

    async def summarize(self, text: str) -> str:
        return await self._run_template(prompts.SUMMARIZE, text)

    async def explain(self, text: str) -> str:
        return await self._run_template(prompts.EXPLAIN, text)

    async def translate(self, text: str, target_language: str) -> str:
        return await self._run_template(prompts.TRANSLATE, text, language=target_language)

    async def improve(self, text: str) -> str:
        return await self._run_template(prompts.IMPROVE, text)

    async def extract_data(self, text: str) -> str:
        return await self._run_template(prompts.EXTRACT, text)

    async def classify(self, text: str) -> str:
        return await self._run_template(prompts.CLASSIFY, text)

    async def tldr(self, text: str) -> str:
        return await self._run_template(prompts.TLDR, text)
