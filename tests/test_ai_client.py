"""Tests for the provider client handed to actions."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cbai.ai.anthropic_provider import AnthropicProvider
from cbai.ai.client import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    LOCAL_PLACEHOLDER_API_KEY,
    AIClient,
    build_provider,
    resolve_endpoint,
)
from cbai.ai.openai_provider import OpenAICompatibleProvider
from cbai.ai.prompts import SUMMARIZE, TRANSLATE
from cbai.domain.config import ProviderConfig
from cbai.errors import UnsupportedProviderError


def _fake_provider(content: str = "result") -> MagicMock:
    provider = MagicMock()
    provider.complete = AsyncMock(
        return_value={
            "content": content,
            "model": "mistral",
            "usage": {"prompt_tokens": 3, "completion_tokens": 4},
        }
    )
    return provider


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        (ProviderConfig(type="ollama", model="m"), "http://localhost:11434/v1"),
        (ProviderConfig(type="openai", model="m"), "https://api.openai.com/v1"),
        (ProviderConfig(type="anthropic", model="m"), "https://api.anthropic.com/v1"),
        (ProviderConfig(type="custom", model="m"), "http://localhost:11434/v1"),
        (ProviderConfig(type="openai", model="m", endpoint="http://proxy/v1"), "http://proxy/v1"),
    ],
)
def test_resolve_endpoint(config, expected):
    assert resolve_endpoint(config) == expected


def test_build_provider_uses_openai_compatible_backend_with_placeholder_key():
    provider = build_provider(ProviderConfig(type="ollama", model="mistral"))

    assert isinstance(provider, OpenAICompatibleProvider)
    assert provider.base_url == "http://localhost:11434/v1"
    assert provider.client.api_key == LOCAL_PLACEHOLDER_API_KEY
    assert provider.client.max_retries == 0


def test_build_provider_anthropic_requires_api_key():
    with pytest.raises(UnsupportedProviderError, match="requires an api_key"):
        build_provider(ProviderConfig(type="anthropic", model="claude"))


def test_build_provider_anthropic_strips_v1_suffix():
    provider = build_provider(
        ProviderConfig(
            type="anthropic",
            model="claude",
            endpoint="https://api.anthropic.com/v1/",
            api_key="sk-ant-test-key-123456",
        )
    )

    assert isinstance(provider, AnthropicProvider)
    assert provider.base_url == "https://api.anthropic.com"


@pytest.mark.asyncio
async def test_generate_forwards_fixed_sampling_parameters():
    provider = _fake_provider()
    client = AIClient(ProviderConfig(type="ollama", model="mistral"), provider=provider)

    response = await client.generate("prompt", "system")

    assert response["content"] == "result"
    provider.complete.assert_awaited_once_with(
        model="mistral",
        prompt="prompt",
        system_prompt="system",
        max_tokens=DEFAULT_MAX_TOKENS,
        temperature=DEFAULT_TEMPERATURE,
    )
    assert DEFAULT_MAX_TOKENS == 1024
    assert DEFAULT_TEMPERATURE == 0.7


@pytest.mark.asyncio
async def test_summarize_renders_template():
    provider = _fake_provider("short")
    client = AIClient(ProviderConfig(type="ollama", model="mistral"), provider=provider)

    assert await client.summarize("long text") == "short"

    kwargs = provider.complete.call_args.kwargs
    assert kwargs["prompt"] == "Summarize the following text concisely:\n\nlong text"
    assert kwargs["system_prompt"] == SUMMARIZE.system


@pytest.mark.asyncio
async def test_translate_substitutes_language_before_text():
    provider = _fake_provider()
    client = AIClient(ProviderConfig(type="ollama", model="mistral"), provider=provider)

    await client.translate("say {LANGUAGE}", "Spanish")

    prompt = provider.complete.call_args.kwargs["prompt"]
    assert prompt == "Translate the following to Spanish:\n\nsay {LANGUAGE}"
    assert provider.complete.call_args.kwargs["system_prompt"] == TRANSLATE.system


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["explain", "improve", "extract_data", "classify", "tldr"])
async def test_text_operations_embed_input(method):
    provider = _fake_provider("out")
    client = AIClient(ProviderConfig(type="ollama", model="mistral"), provider=provider)

    assert await getattr(client, method)("INPUT-TEXT") == "out"
    assert provider.complete.call_args.kwargs["prompt"].endswith("INPUT-TEXT")


@pytest.mark.asyncio
async def test_provider_errors_are_logged_and_propagated():
    provider = MagicMock()
    provider.complete = AsyncMock(side_effect=RuntimeError("down"))
    client = AIClient(ProviderConfig(type="openai", model="gpt"), provider=provider)

    with patch("cbai.ai.client.log_event") as mock_log_event, pytest.raises(RuntimeError, match="down"):
        await client.generate("p")

    events = [call.args[0] for call in mock_log_event.call_args_list]
    assert events == ["ai_request", "ai_error"]


@pytest.mark.asyncio
async def test_openai_provider_builds_chat_messages():
    provider = OpenAICompatibleProvider("http://localhost:11434/v1", "key")
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = "answer"
    completion.model = "mistral"
    completion.usage.prompt_tokens = 5
    completion.usage.completion_tokens = 2
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=completion)

    response = await provider.complete(
        model="mistral", prompt="q", system_prompt="s", max_tokens=10, temperature=0.5
    )

    assert response == {
        "content": "answer",
        "model": "mistral",
        "usage": {"prompt_tokens": 5, "completion_tokens": 2},
    }
    provider.client.chat.completions.create.assert_awaited_once_with(
        model="mistral",
        messages=[{"role": "system", "content": "s"}, {"role": "user", "content": "q"}],
        temperature=0.5,
        max_tokens=10,
    )


@pytest.mark.asyncio
async def test_anthropic_provider_joins_text_blocks():
    provider = AnthropicProvider("sk-ant-test-key-123456")
    text_block = MagicMock(type="text", text="Hello ")
    tool_block = MagicMock(type="tool_use", text="ignored")
    second_block = MagicMock(type="text", text="world")
    message = MagicMock()
    message.content = [text_block, tool_block, second_block]
    message.model = "claude"
    message.usage.input_tokens = 7
    message.usage.output_tokens = 3
    provider.client = MagicMock()
    provider.client.messages.create = AsyncMock(return_value=message)

    response = await provider.complete(
        model="claude", prompt="q", system_prompt="s", max_tokens=10, temperature=0.7
    )

    assert response["content"] == "Hello world"
    assert response["usage"] == {"prompt_tokens": 7, "completion_tokens": 3}
    kwargs = provider.client.messages.create.call_args.kwargs
    assert kwargs["system"] == "s"
    assert kwargs["messages"] == [{"role": "user", "content": "q"}]
