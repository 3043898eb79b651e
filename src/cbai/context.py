"""Environment-derived execution context.

The agent spawns the CLI with environment variables describing how the run
was triggered. They are read once into an immutable ``ExecutionContext`` that
is passed to the components that need it, instead of each component peeking
at ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import (
    AGENT_SOCKET_NAME,
    ENV_CLI_LOG,
    ENV_DAEMON_MODE,
    ENV_HISTORY_FILE,
    ENV_INPUT_TEXT,
    ENV_LOG_DIR,
    ENV_PLUGIN_DIR,
    ENV_SOCKET_PATH,
    ENV_TRIGGER,
    HISTORY_FILE_NAME,
    PLUGIN_DIR_NAME,
    USER_DATA_DIR,
)


def get_user_data_dir() -> Path:
    """Return the per-user application directory shared with the agent."""
    return Path(USER_DATA_DIR).expanduser()


def _path_from_env(environ: Mapping[str, str], name: str, default: Path) -> Path:
    value = environ.get(name)
    if value:
        return Path(value).expanduser()
    return default


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """How and where the current process runs."""

    daemon_mode: bool = False
    trigger_label: Optional[str] = None
    # None means "not overridden"; an empty string is a real override value.
    input_override: Optional[str] = None
    history_file: Path = get_user_data_dir() / HISTORY_FILE_NAME
    plugin_dir: Path = get_user_data_dir() / PLUGIN_DIR_NAME
    log_dir: Path = get_user_data_dir()
    socket_path: Path = get_user_data_dir() / AGENT_SOCKET_NAME
    cli_log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExecutionContext":
        """Build the context from process environment variables."""
        env = os.environ if environ is None else environ
        data_dir = get_user_data_dir()
        cli_log = env.get(ENV_CLI_LOG)
        return cls(
            daemon_mode=env.get(ENV_DAEMON_MODE) == "true",
            trigger_label=env.get(ENV_TRIGGER) or None,
            input_override=env.get(ENV_INPUT_TEXT),
            history_file=_path_from_env(env, ENV_HISTORY_FILE, data_dir / HISTORY_FILE_NAME),
            plugin_dir=_path_from_env(env, ENV_PLUGIN_DIR, data_dir / PLUGIN_DIR_NAME),
            log_dir=_path_from_env(env, ENV_LOG_DIR, data_dir),
            socket_path=_path_from_env(env, ENV_SOCKET_PATH, data_dir / AGENT_SOCKET_NAME),
            cli_log_file=Path(cli_log).expanduser() if cli_log else None,
        )
