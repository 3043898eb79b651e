"""Commands that render what the agent reports about itself."""

from __future__ import annotations

import sys
from typing import Optional

from ..context import ExecutionContext
from ..errors import AgentError
from ..ipc import get_clipboard, get_config, get_status
from ..logging import sanitize_error_message


def _fail(error: Exception) -> int:
    print(f"Error: {sanitize_error_message(str(error))}", file=sys.stderr)
    return 1


async def status_command(context: Optional[ExecutionContext] = None) -> int:
    """Show agent status and the clipboard snapshot it holds."""
    try:
        status = await get_status(context)
    except AgentError as e:
        return _fail(e)

    clipboard = status.get("clipboard") or {}
    print("clipboard-ai agent")
    print("──────────────────")
    print(f"Status:  {status.get('status')}")
    print(f"Version: {status.get('version')}")
    print(f"Uptime:  {status.get('uptime')}")
    print()
    print("Clipboard:")
    print(f"  Type:      {clipboard.get('type')}")
    print(f"  Preview:   {clipboard.get('text') or '(empty)'}")
    print(f"  Timestamp: {clipboard.get('timestamp') or 'N/A'}")
    return 0


async def clipboard_command(context: Optional[ExecutionContext] = None) -> int:
    """Show the current clipboard content."""
    try:
        clipboard = await get_clipboard(context)
    except AgentError as e:
        return _fail(e)

    print(f"Type: {clipboard.get('type')}")
    print(f"Length: {clipboard.get('length')} chars")
    print(f"Timestamp: {clipboard.get('timestamp')}")
    print()
    print("Content:")
    print("────────")
    print(clipboard.get("text") or "(empty)")
    return 0


def _flag(value: object) -> str:
    return "true" if value else "false"


async def config_command(context: Optional[ExecutionContext] = None) -> int:
    """Show the agent configuration (the API key is never printed)."""
    try:
        config = await get_config(context)
    except AgentError as e:
        return _fail(e)

    provider = config.get("provider") or {}
    settings = config.get("settings") or {}
    actions = config.get("actions") or {}

    print("clipboard-ai configuration")
    print("──────────────────────────")
    print()
    print("Provider:")
    print(f"  Type:     {provider.get('type')}")
    print(f"  Model:    {provider.get('model')}")
    print(f"  Endpoint: {provider.get('endpoint')}")
    print()
    print("Settings:")
    print(f"  Poll interval:  {settings.get('poll_interval')}ms")
    print(f"  Safe mode:      {_flag(settings.get('safe_mode'))}")
    print(f"  Notifications:  {_flag(settings.get('notifications'))}")
    print(f"  Log level:      {settings.get('log_level')}")
    print()
    print("Actions:")
    for name, action in actions.items():
        mark = "✓" if action.get("enabled") else "✗"
        print(f"  {mark} {name}: {action.get('trigger')}")
    return 0
