"""Input text acquisition."""

from __future__ import annotations

from typing import Optional

from .context import ExecutionContext
from .ipc import get_clipboard


async def get_input_text(context: Optional[ExecutionContext] = None) -> str:
    """Return the text an action should operate on.

    The environment override wins whenever it is set, even to an empty
    string; otherwise the agent's current clipboard text is used.
    """
    ctx = context or ExecutionContext.from_env()
    if ctx.input_override is not None:
        return ctx.input_override

    clipboard = await get_clipboard(ctx)
    return clipboard.get("text") or ""
