"""Provider trust classification and the safe-mode egress gate."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, Awaitable, Callable, Optional
from urllib.parse import urlsplit

from .domain.config import ProviderConfig
from .errors import PolicyBlocked
from .logging import log_event

if TYPE_CHECKING:
    from .ipc.types import ConfigResponse

CLOUD_PROVIDER_TYPES = frozenset({"openai", "anthropic"})
LOCAL_PROVIDER_TYPES = frozenset({"ollama"})
LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

ConfirmFn = Callable[[str], Awaitable[bool]]


def is_cloud_provider(provider_type: str, endpoint: Optional[str] = None) -> bool:
    """Return True unless the provider is known to stay on this machine.

    Unknown types are local only when the endpoint parses as a URL whose host
    is a loopback address; anything unparseable or missing counts as cloud.
    """
    if provider_type in CLOUD_PROVIDER_TYPES:
        return True
    if provider_type in LOCAL_PROVIDER_TYPES:
        return False

    if endpoint:
        try:
            parts = urlsplit(endpoint)
            host = parts.hostname
            # Raises ValueError for a non-numeric or out-of-range port.
            parts.port
        except ValueError:
            host = None
        if host in LOOPBACK_HOSTS:
            return False

    return True


def _read_answer(message: str) -> str:
    sys.stderr.write(f"{message} [y/N] ")
    sys.stderr.flush()
    return sys.stdin.readline()


async def confirm_on_terminal(message: str) -> bool:
    """Ask a yes/no question on stderr and wait for a line on stdin.

    Blocks until the user answers; EOF or anything but ``y`` declines.
    """
    answer = await asyncio.to_thread(_read_answer, message)
    return answer.strip().lower() == "y"


async def enforce_safe_mode(
    config: "ConfigResponse",
    *,
    yes: bool = False,
    daemon_mode: bool = False,
    confirm: Optional[ConfirmFn] = None,
) -> None:
    """Allow the run or raise ``PolicyBlocked``.

    Args:
        config: Agent configuration holding provider and ``settings.safe_mode``
        yes: Caller passed the skip-confirmation flag
        daemon_mode: Run was triggered by the agent with no human present
        confirm: Interactive confirmation override (defaults to the terminal)

    Raises:
        PolicyBlocked: Daemon-triggered cloud call, or the user declined
    """
    settings = config.get("settings") or {}
    if not settings.get("safe_mode"):
        return

    provider = ProviderConfig.from_agent_config(config)
    if not is_cloud_provider(provider.type, provider.endpoint):
        return

    label = provider.type or provider.endpoint or "unknown"

    if daemon_mode:
        log_event(
            "safe_mode_decision",
            level=logging.WARNING,
            decision="blocked_daemon",
            provider=label,
            daemon_mode=True,
            yes=yes,
        )
        raise PolicyBlocked(f"safe mode: blocked cloud call to {label} (daemon auto-triggered)")

    if yes:
        log_event("safe_mode_decision", decision="allowed_by_flag", provider=label, yes=True)
        return

    ask = confirm or confirm_on_terminal
    if not await ask(f'Safe mode: send clipboard to cloud provider "{label}"?'):
        log_event(
            "safe_mode_decision",
            level=logging.WARNING,
            decision="declined",
            provider=label,
        )
        raise PolicyBlocked(f"safe mode: user declined cloud provider call to {label}")

    log_event("safe_mode_decision", decision="confirmed", provider=label)
