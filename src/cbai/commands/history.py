"""History listing and replay commands."""

from __future__ import annotations

import sys
from typing import Optional

from ..actions import ActionRegistryProvider
from ..constants import DEFAULT_HISTORY_LIMIT
from ..context import ExecutionContext
from ..history import ActionRunRecord, get_history_record_by_id, read_history_records
from ..run_action import RunActionOptions, run_action


def format_history_row(record: ActionRunRecord) -> str:
    status = "ok" if record.get("status") == "success" else "error"
    replay = f" replay:{record['replay_of']}" if record.get("replay_of") else ""
    return (
        f"{record.get('id')} | {record.get('timestamp')} | {status} | "
        f"{record.get('source')} | {record.get('action')} | {record.get('latency_ms')}ms{replay}"
    )


async def history_command(
    limit: Optional[int] = DEFAULT_HISTORY_LIMIT,
    context: Optional[ExecutionContext] = None,
) -> int:
    """Print recent runs, newest first."""
    ctx = context or ExecutionContext.from_env()
    try:
        records = await read_history_records(limit, ctx.history_file)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not records:
        print("No history records found.")
        return 0

    print("Recent action runs")
    print("──────────────────")
    for record in records:
        print(format_history_row(record))
    return 0


async def rerun_command(
    record_id: str,
    *,
    copy: bool = False,
    yes: bool = False,
    context: Optional[ExecutionContext] = None,
    registry_provider: Optional[ActionRegistryProvider] = None,
) -> int:
    """Replay a recorded run with its stored action, args, and input."""
    ctx = context or ExecutionContext.from_env()
    try:
        record = await get_history_record_by_id(record_id, ctx.history_file)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if record is None:
        print(f"Error: History record not found: {record_id}", file=sys.stderr)
        return 1

    return await run_action(
        record["action"],
        RunActionOptions(
            args=list(record.get("args") or []),
            copy=copy,
            yes=yes,
            input_text=record.get("input", ""),
            source="rerun",
            trigger=f"rerun:{record['id']}",
            replay_of=record["id"],
        ),
        context=ctx,
        registry_provider=registry_provider,
    )
