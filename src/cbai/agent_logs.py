"""Read the tail of the agent's log files."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import aiofiles  # type: ignore[import-untyped]

from .constants import AGENT_ERR_FILE_NAME, AGENT_LOG_FILE_NAME, DEFAULT_LOG_TAIL
from .context import ExecutionContext

AgentLogFile = Literal["out", "err"]


def get_agent_log_path(
    file: AgentLogFile = "out",
    context: Optional[ExecutionContext] = None,
) -> Path:
    """Path of the agent's stdout (``out``) or stderr (``err``) log."""
    log_dir = (context or ExecutionContext.from_env()).log_dir
    filename = AGENT_ERR_FILE_NAME if file == "err" else AGENT_LOG_FILE_NAME
    return log_dir / filename


async def read_agent_logs(
    tail: int = DEFAULT_LOG_TAIL,
    file: AgentLogFile = "out",
    context: Optional[ExecutionContext] = None,
) -> list[str]:
    """Return the last ``tail`` non-blank lines of an agent log.

    Raises:
        ValueError: If ``tail`` is not a positive integer
        OSError: If the log file cannot be read
    """
    if isinstance(tail, bool) or not isinstance(tail, int) or tail <= 0:
        raise ValueError("tail must be a positive integer")

    path = get_agent_log_path(file, context)
    async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
        data = await f.read()

    lines = [line.rstrip() for line in data.split("\n")]
    lines = [line for line in lines if line]
    return lines[-tail:]
