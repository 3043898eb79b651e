"""Agent log tail command."""

from __future__ import annotations

import sys
from typing import Optional

from ..agent_logs import AgentLogFile, get_agent_log_path, read_agent_logs
from ..constants import DEFAULT_LOG_TAIL
from ..context import ExecutionContext


async def logs_command(
    tail: int = DEFAULT_LOG_TAIL,
    file: AgentLogFile = "out",
    context: Optional[ExecutionContext] = None,
) -> int:
    try:
        lines = await read_agent_logs(tail, file, context)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        path = get_agent_log_path(file, context)
        print(f"Error: Could not read {path}: {e.strerror or e}", file=sys.stderr)
        return 1

    if not lines:
        print("No log entries found.")
        return 0

    for line in lines:
        print(line)
    return 0
