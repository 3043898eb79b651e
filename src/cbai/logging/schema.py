"""Preferred key order for structured log events."""

from __future__ import annotations

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts", "level", "message"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle events
    "app_start": ["ts", "level", "command", "daemon_mode", "log_file"],
    "app_stop": ["ts", "level", "command", "reason", "exit_code", "uptime_ms", "error_type", "error"],
    # Registry and plugin events
    "registry_built": ["ts", "level", "builtin_count", "plugin_count", "rejected_count", "plugin_dir"],
    "plugin_load_failed": ["ts", "level", "plugin_file", "error_type", "error"],
    "plugin_skipped": ["ts", "level", "plugin_file", "reason"],
    "plugin_conflict": ["ts", "level", "plugin_file", "action", "conflicts"],
    # Run pipeline events
    "action_unknown": ["ts", "level", "action", "available"],
    "safe_mode_decision": ["ts", "level", "decision", "provider", "daemon_mode", "yes"],
    "action_run": [
        "ts",
        "level",
        "run_id",
        "action",
        "status",
        "source",
        "trigger",
        "provider",
        "model",
        "latency_ms",
        "input_chars",
        "output_chars",
        "replay_of",
        "error",
    ],
    "history_write_failed": ["ts", "level", "history_file", "error_type", "error"],
    "history_line_skipped": ["ts", "level", "history_file", "line_number", "error"],
    # Provider events
    "ai_request": ["ts", "level", "provider", "model", "endpoint", "input_chars", "has_system_prompt"],
    "ai_response": ["ts", "level", "provider", "model", "latency_ms", "output_chars", "input_tokens", "output_tokens"],
    "ai_error": ["ts", "level", "provider", "model", "latency_ms", "error_type", "error", "http_status"],
    # Agent IPC events
    "agent_request_error": ["ts", "level", "method", "path", "socket_path", "error_type", "error"],
}
