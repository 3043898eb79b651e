"""Typed response contracts exchanged with the agent."""

from __future__ import annotations

from typing import NotRequired, TypedDict


class ClipboardSnapshot(TypedDict):
    """Clipboard summary embedded in the status response."""

    text: str
    type: str
    timestamp: str


class StatusResponse(TypedDict):
    """``GET /status`` payload."""

    status: str
    uptime: str
    version: str
    clipboard: ClipboardSnapshot


class ClipboardResponse(TypedDict):
    """``GET /clipboard`` payload."""

    text: str
    type: str
    timestamp: str
    length: int


class ProviderSettings(TypedDict):
    """Provider block of the agent configuration."""

    type: str
    endpoint: str
    model: str
    api_key: NotRequired[str]


class ActionSettings(TypedDict):
    """Per-action daemon trigger configuration."""

    enabled: bool
    trigger: str


class AppSettings(TypedDict):
    """General agent settings."""

    poll_interval: int
    safe_mode: bool
    notifications: bool
    log_level: str


class ConfigResponse(TypedDict):
    """``GET /config`` payload."""

    provider: ProviderSettings
    actions: dict[str, ActionSettings]
    settings: AppSettings


class ActionResponse(TypedDict):
    """``POST /action`` payload."""

    success: bool
    action: str
    result: NotRequired[str]
    error: NotRequired[str]
