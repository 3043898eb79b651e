"""Tests for the JSONL run history store."""

from __future__ import annotations

import json
import re
from unittest.mock import patch

import pytest
from freezegun import freeze_time

from cbai.errors import HistoryWriteError
from cbai.history import (
    append_history_record,
    generate_run_id,
    get_history_file,
    get_history_record_by_id,
    read_history_records,
)


def _entry(**overrides):
    entry = {
        "action": "summary",
        "args": [],
        "source": "manual",
        "trigger": "cli",
        "provider": "ollama",
        "model": "mistral",
        "latency_ms": 12,
        "status": "success",
        "copy": False,
        "input": "hello",
        "output": "hi",
    }
    entry.update(overrides)
    return entry


def test_generate_run_id_shape():
    run_id = generate_run_id()
    assert re.fullmatch(r"[0-9a-z]+-[0-9a-z]{6}", run_id)
    assert generate_run_id() != run_id


@freeze_time("2026-01-02 03:04:05.678")
def test_generate_run_id_prefix_is_base36_milliseconds():
    prefix = generate_run_id().split("-")[0]
    assert int(prefix, 36) == 1767323045678


@pytest.mark.asyncio
async def test_append_assigns_id_and_timestamp(tmp_path):
    history_file = tmp_path / "nested" / "history.jsonl"

    with patch("cbai.history.utc_now_iso", return_value="2026-01-02T03:04:05.678Z"):
        stored = await append_history_record(_entry(), history_file)

    assert stored["timestamp"] == "2026-01-02T03:04:05.678Z"
    assert re.fullmatch(r"[0-9a-z]+-[0-9a-z]{6}", stored["id"])
    lines = history_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0]) == stored


@pytest.mark.asyncio
async def test_append_keeps_supplied_id_and_timestamp(tmp_path):
    history_file = tmp_path / "history.jsonl"

    stored = await append_history_record(
        _entry(id="fixed-id", timestamp="2025-12-31T00:00:00.000Z"), history_file
    )

    assert stored["id"] == "fixed-id"
    assert stored["timestamp"] == "2025-12-31T00:00:00.000Z"


@pytest.mark.asyncio
async def test_records_are_one_line_each_even_with_newlines(tmp_path):
    history_file = tmp_path / "history.jsonl"

    await append_history_record(_entry(input="line one\nline two"), history_file)
    await append_history_record(_entry(output="multi\nline"), history_file)

    assert len(history_file.read_text(encoding="utf-8").splitlines()) == 2


@pytest.mark.asyncio
async def test_read_returns_newest_first_with_limit(tmp_path):
    history_file = tmp_path / "history.jsonl"
    for index in range(5):
        await append_history_record(_entry(id=f"run-{index}"), history_file)

    all_records = await read_history_records(history_file=history_file)
    limited = await read_history_records(2, history_file)
    negative = await read_history_records(-1, history_file)
    zero = await read_history_records(0, history_file)

    assert [r["id"] for r in all_records] == ["run-4", "run-3", "run-2", "run-1", "run-0"]
    assert [r["id"] for r in limited] == ["run-4", "run-3"]
    assert len(negative) == 5
    assert zero == []


@pytest.mark.asyncio
async def test_read_missing_file_is_empty(tmp_path):
    assert await read_history_records(history_file=tmp_path / "missing.jsonl") == []


@pytest.mark.asyncio
async def test_malformed_and_blank_lines_are_skipped(tmp_path):
    history_file = tmp_path / "history.jsonl"
    history_file.write_text(
        '{"id": "a", "action": "summary"}\n'
        "\n"
        '{"id": "b", "act\n'
        "[1, 2]\n"
        '{"id": "c", "action": "tldr"}\n',
        encoding="utf-8",
    )

    records = await read_history_records(history_file=history_file)

    assert [r["id"] for r in records] == ["c", "a"]


@pytest.mark.asyncio
async def test_get_record_by_id(tmp_path):
    history_file = tmp_path / "history.jsonl"
    await append_history_record(_entry(id="first"), history_file)
    await append_history_record(_entry(id="second", action="tldr"), history_file)

    found = await get_history_record_by_id("first", history_file)
    missing = await get_history_record_by_id("third", history_file)

    assert found is not None
    assert found["action"] == "summary"
    assert missing is None


@pytest.mark.asyncio
async def test_write_failure_raises_history_write_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(HistoryWriteError, match="Could not write history record"):
        await append_history_record(_entry(), blocker / "history.jsonl")


@pytest.mark.asyncio
async def test_unserializable_record_raises_history_write_error(tmp_path):
    with pytest.raises(HistoryWriteError):
        await append_history_record(_entry(args=[object()]), tmp_path / "history.jsonl")


def test_history_file_comes_from_context(context):
    assert get_history_file(context) == context.history_file


@pytest.mark.asyncio
async def test_invalid_utf8_bytes_do_not_break_reading(tmp_path):
    history_file = tmp_path / "history.jsonl"
    history_file.write_bytes(
        b'{"id": "a", "action": "summary"}\n'
        b"\xff\xfe garbage\n"
        b'{"id": "b", "input": "caf\xe9"}\n'
    )

    records = await read_history_records(history_file=history_file)

    assert [r["id"] for r in records] == ["b", "a"]
    assert records[0]["input"] == "caf�"
