"""Pytest configuration and fixtures for cbai tests."""

import pytest

from cbai.context import ExecutionContext


@pytest.fixture
def make_context(tmp_path):
    """Factory for execution contexts whose files live under ``tmp_path``."""

    def _make(**overrides):
        values = {
            "history_file": tmp_path / "history.jsonl",
            "plugin_dir": tmp_path / "actions",
            "log_dir": tmp_path,
            "socket_path": tmp_path / "agent.sock",
        }
        values.update(overrides)
        return ExecutionContext(**values)

    return _make


@pytest.fixture
def context(make_context):
    """Manual (non-daemon) execution context."""
    return make_context()
