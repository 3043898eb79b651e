"""CLI command handlers; each returns a process exit code."""

from .actions import actions_command
from .agent_info import clipboard_command, config_command, status_command
from .history import history_command, rerun_command
from .logs import logs_command

__all__ = [
    "actions_command",
    "clipboard_command",
    "config_command",
    "history_command",
    "logs_command",
    "rerun_command",
    "status_command",
]
