"""Shared provider log-message helpers."""

from __future__ import annotations

import logging

from ..logging import log_event


def log_provider_error(provider: str, message: str) -> None:
    """Emit a standardized provider error log event."""
    log_event(
        "provider_log",
        level=logging.ERROR,
        provider=provider,
        message=message,
    )


def authentication_failed_message(error: Exception) -> str:
    """Build the standard authentication-failure message."""
    return f"Authentication failed: {error}"


def bad_request_message(error: Exception) -> str:
    """Build the provider bad-request message."""
    return f"Bad request: {error}"


def connection_failed_message(error: Exception, endpoint: str | None) -> str:
    """Build the message for an unreachable provider endpoint."""
    target = endpoint or "provider endpoint"
    return f"Could not reach {target}: {type(error).__name__}: {error}"

