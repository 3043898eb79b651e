"""Append-only run history stored as newline-delimited JSON."""

from __future__ import annotations

import json
import logging
import secrets
import string
from pathlib import Path
from typing import Literal, NotRequired, Optional, TypedDict

import aiofiles  # type: ignore[import-untyped]

from .context import ExecutionContext
from .errors import HistoryWriteError
from .logging import log_event
from .time_utils import utc_now_iso, utc_now_ms

RunSource = Literal["manual", "daemon", "rerun"]
RunStatus = Literal["success", "error"]

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 6


class ActionRunRecord(TypedDict):
    """One execution attempt, exactly as persisted."""

    id: str
    timestamp: str
    action: str
    args: list[str]
    source: RunSource
    trigger: str
    provider: str
    model: str
    latency_ms: int
    status: RunStatus
    copy: bool
    input: str
    output: NotRequired[str]
    error: NotRequired[str]
    replay_of: NotRequired[str]


class ActionRunRecordInput(TypedDict):
    """Record fields supplied by the writer; ``id``/``timestamp`` are generated."""

    action: str
    args: list[str]
    source: RunSource
    trigger: str
    provider: str
    model: str
    latency_ms: int
    status: RunStatus
    copy: bool
    input: str
    id: NotRequired[str]
    timestamp: NotRequired[str]
    output: NotRequired[str]
    error: NotRequired[str]
    replay_of: NotRequired[str]


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_run_id() -> str:
    """Timestamp-based id with a random suffix, e.g. ``m5x2k3a1-q8z0ab``."""
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{_to_base36(utc_now_ms())}-{suffix}"


def get_history_file(context: Optional[ExecutionContext] = None) -> Path:
    """Resolve the history log path from the execution context."""
    return (context or ExecutionContext.from_env()).history_file


async def append_history_record(
    entry: ActionRunRecordInput,
    history_file: Optional[Path] = None,
) -> ActionRunRecord:
    """Complete the record and append it as one JSON line.

    Raises:
        HistoryWriteError: If the record cannot be serialized or written
    """
    record = dict(entry)
    record["id"] = entry.get("id") or generate_run_id()
    record["timestamp"] = entry.get("timestamp") or utc_now_iso()

    path = Path(history_file) if history_file is not None else get_history_file()
    try:
        line = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "a", encoding="utf-8") as f:
            await f.write(line + "\n")
    except (OSError, TypeError, ValueError) as e:
        raise HistoryWriteError(f"Could not write history record to {path}: {e}") from e

    return record  # type: ignore[return-value]


async def read_history_records(
    limit: Optional[int] = None,
    history_file: Optional[Path] = None,
) -> list[ActionRunRecord]:
    """Return records newest first, truncated to ``limit`` when it is >= 0."""
    path = Path(history_file) if history_file is not None else get_history_file()
    if not path.exists():
        return []

    async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
        data = await f.read()

    records: list[ActionRunRecord] = []
    for line_number, raw_line in enumerate(data.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            parsed = json.loads(line)
        except ValueError as e:
            # Torn lines from concurrent appenders are skipped.
            log_event(
                "history_line_skipped",
                level=logging.WARNING,
                history_file=path,
                line_number=line_number,
                error=str(e),
            )
            continue
        if isinstance(parsed, dict):
            records.append(parsed)  # type: ignore[arg-type]

    records.reverse()

    if limit is not None and limit >= 0:
        return records[:limit]
    return records


async def get_history_record_by_id(
    record_id: str,
    history_file: Optional[Path] = None,
) -> Optional[ActionRunRecord]:
    """Find one record by id; ``None`` when absent."""
    for record in await read_history_records(history_file=history_file):
        if record.get("id") == record_id:
            return record
    return None
