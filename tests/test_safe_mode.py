"""Tests for provider classification and the safe-mode gate."""

from __future__ import annotations

import io
import sys
from unittest.mock import AsyncMock, patch

import pytest

from cbai.errors import PolicyBlocked
from cbai.safe_mode import confirm_on_terminal, enforce_safe_mode, is_cloud_provider
from test_helpers import make_config


@pytest.mark.parametrize(
    ("provider_type", "endpoint", "expected"),
    [
        ("openai", None, True),
        ("openai", "http://localhost:8080/v1", True),
        ("anthropic", None, True),
        ("ollama", None, False),
        ("ollama", "https://ollama.example.com", False),
        ("custom", "http://localhost:1234/v1", False),
        ("custom", "http://127.0.0.1:1234/v1", False),
        ("custom", "http://[::1]:1234/v1", False),
        ("custom", "https://llm.example.com/v1", True),
        ("custom", None, True),
        ("custom", "", True),
        ("custom", "not a url", True),
        ("custom", "http://[bad-ipv6/v1", True),
        ("custom", "http://localhost:notaport/v1", True),
        ("custom", "http://127.0.0.1:99999/v1", True),
        ("", "http://localhost:1234", False),
    ],
)
def test_is_cloud_provider(provider_type, endpoint, expected):
    assert is_cloud_provider(provider_type, endpoint) is expected


@pytest.mark.asyncio
async def test_safe_mode_off_allows_everything():
    confirm = AsyncMock(return_value=False)
    await enforce_safe_mode(make_config("openai"), daemon_mode=True, confirm=confirm)
    confirm.assert_not_awaited()


@pytest.mark.asyncio
async def test_local_provider_is_never_gated():
    confirm = AsyncMock(return_value=False)
    await enforce_safe_mode(make_config("ollama", safe_mode=True), daemon_mode=True, confirm=confirm)
    await enforce_safe_mode(
        make_config("custom", endpoint="http://localhost:9000/v1", safe_mode=True),
        confirm=confirm,
    )
    confirm.assert_not_awaited()


@pytest.mark.asyncio
async def test_daemon_mode_blocks_even_with_yes():
    confirm = AsyncMock(return_value=True)

    with pytest.raises(PolicyBlocked, match=r"safe mode: blocked cloud call to openai \(daemon auto-triggered\)"):
        await enforce_safe_mode(
            make_config("openai", safe_mode=True), yes=True, daemon_mode=True, confirm=confirm
        )

    confirm.assert_not_awaited()


@pytest.mark.asyncio
async def test_yes_flag_skips_confirmation():
    confirm = AsyncMock(return_value=False)
    await enforce_safe_mode(make_config("anthropic", safe_mode=True), yes=True, confirm=confirm)
    confirm.assert_not_awaited()


@pytest.mark.asyncio
async def test_confirmation_accepted_allows_call():
    confirm = AsyncMock(return_value=True)
    await enforce_safe_mode(make_config("openai", safe_mode=True), confirm=confirm)
    confirm.assert_awaited_once_with('Safe mode: send clipboard to cloud provider "openai"?')


@pytest.mark.asyncio
async def test_confirmation_declined_blocks():
    with pytest.raises(PolicyBlocked, match="safe mode: user declined cloud provider call to openai"):
        await enforce_safe_mode(
            make_config("openai", safe_mode=True), confirm=AsyncMock(return_value=False)
        )


@pytest.mark.asyncio
async def test_unknown_remote_provider_uses_type_as_label():
    with pytest.raises(PolicyBlocked, match="to custom"):
        await enforce_safe_mode(
            make_config("custom", endpoint="https://llm.example.com/v1", safe_mode=True),
            daemon_mode=True,
        )


@pytest.mark.asyncio
async def test_every_decision_is_logged():
    with patch("cbai.safe_mode.log_event") as mock_log_event:
        await enforce_safe_mode(make_config("openai", safe_mode=True), yes=True)

    mock_log_event.assert_called_once_with(
        "safe_mode_decision", decision="allowed_by_flag", provider="openai", yes=True
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(("answer", "expected"), [("y\n", True), ("Y\n", True), ("yes\n", False), ("n\n", False), ("", False)])
async def test_confirm_on_terminal(monkeypatch, capsys, answer, expected):
    monkeypatch.setattr(sys, "stdin", io.StringIO(answer))

    assert await confirm_on_terminal("Proceed?") is expected

    captured = capsys.readouterr()
    assert "Proceed? [y/N] " in captured.err
    assert captured.out == ""
