"""Tests for agent log tailing."""

import pytest

from cbai.agent_logs import get_agent_log_path, read_agent_logs


def test_log_paths(context):
    assert get_agent_log_path("out", context) == context.log_dir / "agent.log"
    assert get_agent_log_path("err", context) == context.log_dir / "agent.err"


@pytest.mark.asyncio
async def test_tail_returns_last_non_blank_lines(context):
    (context.log_dir / "agent.log").write_text("one\n\ntwo  \n   \nthree\nfour\n", encoding="utf-8")

    assert await read_agent_logs(2, "out", context) == ["three", "four"]
    assert await read_agent_logs(100, "out", context) == ["one", "two", "three", "four"]


@pytest.mark.asyncio
async def test_reads_error_log(context):
    (context.log_dir / "agent.err").write_text("failure\n", encoding="utf-8")

    assert await read_agent_logs(10, "err", context) == ["failure"]


@pytest.mark.asyncio
@pytest.mark.parametrize("tail", [0, -3, True])
async def test_tail_must_be_positive(context, tail):
    with pytest.raises(ValueError, match="tail must be a positive integer"):
        await read_agent_logs(tail, "out", context)


@pytest.mark.asyncio
async def test_missing_log_raises_os_error(context):
    with pytest.raises(OSError):
        await read_agent_logs(10, "out", context)
