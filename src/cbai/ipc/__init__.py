"""Agent IPC client and module-level request helpers."""

from __future__ import annotations

from typing import Optional

from ..context import ExecutionContext
from .client import (
    AGENT_NOT_RESPONDING_MESSAGE,
    AGENT_NOT_RUNNING_MESSAGE,
    AgentClient,
)
from .types import (
    ActionResponse,
    ClipboardResponse,
    ConfigResponse,
    StatusResponse,
)


def get_agent_client(context: Optional[ExecutionContext] = None) -> AgentClient:
    """Build a client for the agent socket named by the execution context."""
    ctx = context or ExecutionContext.from_env()
    return AgentClient(ctx.socket_path)


async def get_status(context: Optional[ExecutionContext] = None) -> StatusResponse:
    return await get_agent_client(context).get_status()


async def get_clipboard(context: Optional[ExecutionContext] = None) -> ClipboardResponse:
    return await get_agent_client(context).get_clipboard()


async def get_config(context: Optional[ExecutionContext] = None) -> ConfigResponse:
    return await get_agent_client(context).get_config()


async def run_agent_action(
    action: str,
    text: Optional[str] = None,
    context: Optional[ExecutionContext] = None,
) -> ActionResponse:
    return await get_agent_client(context).run_action(action, text)


__all__ = [
    "AGENT_NOT_RESPONDING_MESSAGE",
    "AGENT_NOT_RUNNING_MESSAGE",
    "ActionResponse",
    "AgentClient",
    "ClipboardResponse",
    "ConfigResponse",
    "StatusResponse",
    "get_agent_client",
    "get_clipboard",
    "get_config",
    "get_status",
    "run_agent_action",
]
