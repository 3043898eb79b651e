"""Structured logging primitives for the clipboard-ai CLI."""

from .events import (
    extract_http_error_context,
    log_event,
    setup_logging,
    warn,
)
from .formatter import StructuredTextFormatter
from .sanitization import sanitize_error_message
from .schema import DEFAULT_EVENT_KEY_ORDER, EVENT_KEY_ORDER

__all__ = [
    "DEFAULT_EVENT_KEY_ORDER",
    "EVENT_KEY_ORDER",
    "StructuredTextFormatter",
    "extract_http_error_context",
    "log_event",
    "sanitize_error_message",
    "setup_logging",
    "warn",
]
