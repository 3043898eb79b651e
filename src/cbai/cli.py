"""CLI bootstrap entry point for cbai."""

import argparse
import asyncio
import logging
import sys
import time
from typing import Optional, Sequence

from . import __version__
from .actions import BUILTIN_ACTIONS, ActionRegistryProvider
from .commands import (
    actions_command,
    clipboard_command,
    config_command,
    history_command,
    logs_command,
    rerun_command,
    status_command,
)
from .constants import CLI_NAME, DEFAULT_HISTORY_LIMIT, DEFAULT_LOG_TAIL
from .context import ExecutionContext
from .logging import log_event, sanitize_error_message, setup_logging
from .run_action import RunActionOptions, run_action

__all__ = ["build_parser", "main", "normalize_argv"]

INTERRUPTED_EXIT_CODE = 130

_GLOBAL_OPTIONS_WITH_VALUE = {"-l", "--log"}


def _add_run_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("args", nargs="*", help="Extra arguments passed to the action")
    parser.add_argument("-c", "--copy", action="store_true", help="Copy the result to the clipboard")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip the safe-mode confirmation prompt")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=CLI_NAME,
        description="cbai - AI actions on your clipboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-l", "--log", help="Path to log file for structured CLI logging (optional)")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    run_parser = subparsers.add_parser("run", help="Run any action, including plugins")
    run_parser.add_argument("action", help="Action id or alias")
    _add_run_flags(run_parser)
    run_parser.set_defaults(command="run")

    for action in BUILTIN_ACTIONS:
        shortcut = subparsers.add_parser(
            action.id,
            aliases=list(action.aliases),
            help=action.description,
        )
        _add_run_flags(shortcut)
        shortcut.set_defaults(command="run", action=action.id)

    actions_parser = subparsers.add_parser("actions", help="List built-in and plugin actions")
    actions_parser.set_defaults(command="actions")

    history_parser = subparsers.add_parser("history", help="Show recent action runs")
    history_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=DEFAULT_HISTORY_LIMIT,
        help=f"Number of records to show (default: {DEFAULT_HISTORY_LIMIT})",
    )
    history_parser.set_defaults(command="history")

    rerun_parser = subparsers.add_parser("rerun", help="Replay a run from history")
    rerun_parser.add_argument("id", help="History record id")
    rerun_parser.add_argument("-c", "--copy", action="store_true", help="Copy the result to the clipboard")
    rerun_parser.add_argument("-y", "--yes", action="store_true", help="Skip the safe-mode confirmation prompt")
    rerun_parser.set_defaults(command="rerun")

    for name, help_text in (
        ("status", "Show agent status"),
        ("clipboard", "Show current clipboard content"),
        ("config", "Show agent configuration"),
    ):
        subparsers.add_parser(name, help=help_text).set_defaults(command=name)

    logs_parser = subparsers.add_parser("logs", help="Show agent logs")
    logs_parser.add_argument(
        "-n",
        "--tail",
        type=int,
        default=DEFAULT_LOG_TAIL,
        help=f"Number of lines to show (default: {DEFAULT_LOG_TAIL})",
    )
    logs_parser.add_argument("--err", action="store_true", help="Show the agent error log")
    logs_parser.set_defaults(command="logs")

    return parser


def _known_commands(parser: argparse.ArgumentParser) -> set[str]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return set(action.choices)
    return set()


def normalize_argv(argv: Sequence[str], known_commands: set[str]) -> list[str]:
    """Route ``cbai <plugin-id> ...`` to ``cbai run <plugin-id> ...``.

    The first positional token that is not a known command is treated as an
    action name, so plugin actions can be invoked like built-in shortcuts.
    """
    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in _GLOBAL_OPTIONS_WITH_VALUE:
            index += 2
            continue
        if token.startswith("-"):
            index += 1
            continue
        if token not in known_commands:
            tokens.insert(index, "run")
        break
    return tokens


async def dispatch(
    args: argparse.Namespace,
    context: ExecutionContext,
    registry_provider: ActionRegistryProvider,
) -> int:
    """Run the selected command and return its exit code."""
    command = args.command
    if command == "run":
        return await run_action(
            args.action,
            RunActionOptions(args=list(args.args), copy=args.copy, yes=args.yes),
            context=context,
            registry_provider=registry_provider,
        )
    if command == "actions":
        return await actions_command(registry_provider)
    if command == "history":
        return await history_command(args.limit, context)
    if command == "rerun":
        return await rerun_command(
            args.id,
            copy=args.copy,
            yes=args.yes,
            context=context,
            registry_provider=registry_provider,
        )
    if command == "status":
        return await status_command(context)
    if command == "clipboard":
        return await clipboard_command(context)
    if command == "config":
        return await config_command(context)
    if command == "logs":
        return await logs_command(args.tail, "err" if args.err else "out", context)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the cbai CLI."""
    parser = build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(normalize_argv(raw_args, _known_commands(parser)))

    if not args.command:
        parser.print_help()
        sys.exit(1)

    context = ExecutionContext.from_env()
    log_file = args.log or (str(context.cli_log_file) if context.cli_log_file else None)
    setup_logging(log_file)

    app_started = time.perf_counter()
    log_event(
        "app_start",
        level=logging.INFO,
        command=args.command,
        daemon_mode=context.daemon_mode,
        log_file=log_file,
    )

    registry_provider = ActionRegistryProvider(context.plugin_dir)

    try:
        exit_code = asyncio.run(dispatch(args, context, registry_provider))
    except KeyboardInterrupt:
        log_event(
            "app_stop",
            level=logging.INFO,
            command=args.command,
            reason="keyboard_interrupt",
            exit_code=INTERRUPTED_EXIT_CODE,
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        print("\nInterrupted", file=sys.stderr)
        sys.exit(INTERRUPTED_EXIT_CODE)
    except Exception as e:
        message = sanitize_error_message(str(e))
        print(f"Error: {message}", file=sys.stderr)
        log_event(
            "app_stop",
            level=logging.ERROR,
            command=args.command,
            reason="fatal_error",
            exit_code=1,
            error_type=type(e).__name__,
            error=message,
            uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
        )
        logging.error("Fatal error: %s", message, exc_info=True)
        sys.exit(1)

    log_event(
        "app_stop",
        level=logging.INFO,
        command=args.command,
        reason="normal",
        exit_code=exit_code,
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
