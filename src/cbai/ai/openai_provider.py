"""OpenAI-compatible chat completion provider (OpenAI, Ollama, custom endpoints)."""

from __future__ import annotations

from typing import Any, Optional

from openai import (
    APIConnectionError,
    APIStatusError,
    AsyncOpenAI,
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


class OpenAICompatibleProvider:
    """Thin wrapper around ``chat.completions.create``."""

    def __init__(self, base_url: str, api_key: str, timeout: float = AI_REQUEST_TIMEOUT_SEC):
        self.base_url = base_url
        self.timeout = timeout
        # No SDK retries: a failed call surfaces immediately to the run pipeline.
        self.client: Any = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int,
        temperature: float,
    ) -> AIResponse:
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except AuthenticationError as e:
            log_provider_error("openai", authentication_failed_message(e))
            raise
        except BadRequestError as e:
            log_provider_error("openai", bad_request_message(e))
            raise
        except APIConnectionError as e:
            log_provider_error("openai", connection_failed_message(e, self.base_url))
            raise
        except APIStatusError as e:
            log_provider_error("openai", f"API error ({e.status_code}): {e}")
            raise

        choice = response.choices[0] if response.choices else None
        content = (choice.message.content if choice is not None else None) or ""
        result: AIResponse = {"content": content, "model": response.model or model}
        if response.usage is not None:
            result["usage"] = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
            }
        return result
