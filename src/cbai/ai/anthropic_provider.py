"""Anthropic messages API provider."""

from __future__ import annotations

from typing import Any, Optional

from anthropic import (
    APIConnectionError,
    APIStatusError,
    AsyncAnthropic,
    AuthenticationError,
    BadRequestError,
)

from ..constants import AI_REQUEST_TIMEOUT_SEC
from .provider_logging import (
    authentication_failed_message,
    bad_request_message,
    connection_failed_message,
    log_provider_error,
)
from .types import AIResponse


def _normalize_base_url(endpoint: Optional[str]) -> Optional[str]:
    """The SDK appends ``/v1`` itself, so strip it from configured endpoints."""
    if not endpoint:
        return None
    trimmed = endpoint.rstrip("/")
    if trimmed.endswith("/v1"):
        trimmed = trimmed[: -len("/v1")]
    return trimmed


class AnthropicProvider:
    """Thin wrapper around ``messages.create``."""

    def __init__(
        self,
        api_key: str,
        endpoint: Optional[str] = None,
        timeout: float = AI_REQUEST_TIMEOUT_SEC,
    ):
        self.base_url = _normalize_base_url(endpoint)
        self.timeout = timeout
        kwargs: dict[str, Any] = {"api_key": api_key, "timeout": timeout, "max_retries": 0}
        if self.base_url:
            kwargs["base_url"] = self.base_url
        self.client: Any = AsyncAnthropic(**kwargs)

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int,
        temperature: float,
    ) -> AIResponse:
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await self.client.messages.create(**kwargs)
        except AuthenticationError as e:
            log_provider_error("anthropic", authentication_failed_message(e))
            raise
        except BadRequestError as e:
            log_provider_error("anthropic", bad_request_message(e))
            raise
        except APIConnectionError as e:
            log_provider_error("anthropic", connection_failed_message(e, self.base_url))
            raise
        except APIStatusError as e:
            log_provider_error("anthropic", f"API error ({e.status_code}): {e}")
            raise

        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        result: AIResponse = {"content": content, "model": response.model or model}
        if response.usage is not None:
            result["usage"] = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
            }
        return result
