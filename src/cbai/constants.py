"""Application-level constants for the clipboard-ai CLI.

This module keeps only cross-cutting app/file/path/environment constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "clipboard-ai"
CLI_NAME = "cbai"
AGENT_BINARY_NAME = "clipboard-ai-agent"

# ============================================================================
# Default directories and paths
# ============================================================================

# User data directory shared with the agent (created in home directory)
USER_DATA_DIR = f"~/.{APP_NAME}"

HISTORY_FILE_NAME = "history.jsonl"
PLUGIN_DIR_NAME = "actions"
AGENT_SOCKET_NAME = "agent.sock"
AGENT_LOG_FILE_NAME = "agent.log"
AGENT_ERR_FILE_NAME = "agent.err"

# ============================================================================
# Environment variables (execution context)
# ============================================================================

ENV_DAEMON_MODE = "CBAI_DAEMON_MODE"
ENV_TRIGGER = "CBAI_TRIGGER"
ENV_INPUT_TEXT = "CBAI_INPUT_TEXT"
ENV_HISTORY_FILE = "CBAI_HISTORY_FILE"
ENV_PLUGIN_DIR = "CBAI_PLUGIN_DIR"
ENV_LOG_DIR = "CBAI_LOG_DIR"
ENV_SOCKET_PATH = "CBAI_SOCKET_PATH"
ENV_CLI_LOG = "CBAI_CLI_LOG"

# ============================================================================
# Defaults
# ============================================================================

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_LOG_TAIL = 100
AGENT_REQUEST_TIMEOUT_SEC = 10.0
AI_REQUEST_TIMEOUT_SEC = 120.0

# Base host used for HTTP requests routed over the agent's Unix socket.
AGENT_BASE_URL = "http://agent"
