"""Run-action pipeline: resolve, acquire, gate, execute, record, report.

Pre-flight failures (unknown action, input/config acquisition failure, empty
input) exit without a history record. Once an action, its configuration and
non-empty input are in hand, exactly one history record is written whatever
the outcome, and a failure to write it never changes the exit status.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Literal, Optional, TypeAlias

from .actions import (
    ActionContext,
    ActionDefinition,
    ActionRegistry,
    ActionRegistryProvider,
    resolve_action,
)
from .ai.client import AIClient
from .clipboard import copy_to_clipboard
from .context import ExecutionContext
from .domain.config import ProviderConfig
from .errors import EmptyInputError, ExecutionError, HistoryWriteError, ResolutionError
from .history import ActionRunRecordInput, RunSource, append_history_record
from .input import get_input_text
from .ipc import get_config
from .logging import log_event, sanitize_error_message, warn
from .safe_mode import ConfirmFn, enforce_safe_mode

EMPTY_INPUT_MESSAGE = "Clipboard is empty"
INTERRUPTED_MESSAGE = "Run interrupted"
RULE_CHAR = "─"


@dataclass(slots=True)
class RunActionOptions:
    """Caller-supplied knobs for one pipeline invocation."""

    args: list[str] = field(default_factory=list)
    copy: bool = False
    yes: bool = False
    registry: Optional[ActionRegistry] = None
    # Replay overrides
    input_text: Optional[str] = None
    source: Optional[RunSource] = None
    trigger: Optional[str] = None
    replay_of: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RunSuccess:
    """Action produced output."""

    output: str
    kind: Literal["success"] = "success"


@dataclass(slots=True, frozen=True)
class RunFailure:
    """Gate, execution, or delivery failed."""

    error: str
    kind: Literal["error"] = "error"


RunOutcome: TypeAlias = RunSuccess | RunFailure


@dataclass(slots=True, frozen=True)
class RunProvenance:
    """Where a run came from, fixed once input and config are known."""

    action_id: str
    source: RunSource
    trigger: str


def capture_provenance(
    action: ActionDefinition,
    options: RunActionOptions,
    context: ExecutionContext,
) -> RunProvenance:
    """Resolve canonical id, source, and trigger label for the history record."""
    source: RunSource = options.source or ("daemon" if context.daemon_mode else "manual")
    trigger = options.trigger or context.trigger_label or ("cli" if source == "manual" else "daemon")
    return RunProvenance(action_id=action.id, source=source, trigger=trigger)


def print_unknown_action(error: ResolutionError, registry: ActionRegistry) -> None:
    print(f"Error: {error}", file=sys.stderr)
    print(f"Available actions: {', '.join(registry.action_ids())}", file=sys.stderr)


def print_action_output(action: ActionDefinition, output: str) -> None:
    print(f"{action.output_title}:")
    print(RULE_CHAR * len(action.output_title))
    print(output)


def require_action(registry: ActionRegistry, name: str) -> ActionDefinition:
    """Resolve an action name or raise ``ResolutionError``."""
    action = resolve_action(registry, name)
    if action is None:
        raise ResolutionError(f'Unknown action "{name}"')
    return action


async def _acquire_text(options: RunActionOptions, context: ExecutionContext) -> str:
    if options.input_text is not None:
        text = options.input_text
    else:
        text = await get_input_text(context)
    if not text:
        raise EmptyInputError(EMPTY_INPUT_MESSAGE)
    return text


def _build_record(
    *,
    provenance: RunProvenance,
    options: RunActionOptions,
    provider: ProviderConfig,
    text: str,
    latency_ms: int,
    outcome: RunOutcome,
) -> ActionRunRecordInput:
    record: ActionRunRecordInput = {
        "action": provenance.action_id,
        "args": list(options.args),
        "source": provenance.source,
        "trigger": provenance.trigger,
        "provider": provider.type,
        "model": provider.model,
        "latency_ms": latency_ms,
        "status": outcome.kind,
        "copy": options.copy,
        "input": text,
    }
    if isinstance(outcome, RunSuccess):
        record["output"] = outcome.output
    else:
        record["error"] = outcome.error
    if options.replay_of:
        record["replay_of"] = options.replay_of
    return record


async def _record_run(record: ActionRunRecordInput, context: ExecutionContext) -> None:
    """Append the history record; a write failure is only a warning."""
    try:
        stored = await append_history_record(record, context.history_file)
    except HistoryWriteError as e:
        warn(
            f"Failed to write history record: {e}",
            "history_write_failed",
            history_file=context.history_file,
            error_type=type(e).__name__,
        )
        return

    log_event(
        "action_run",
        level=logging.INFO if record["status"] == "success" else logging.WARNING,
        run_id=stored["id"],
        action=record["action"],
        status=record["status"],
        source=record["source"],
        trigger=record["trigger"],
        provider=record["provider"],
        model=record["model"],
        latency_ms=record["latency_ms"],
        input_chars=len(record["input"]),
        output_chars=len(record.get("output", "")),
        replay_of=record.get("replay_of"),
        error=record.get("error"),
    )


async def run_action(
    action_name: str,
    options: Optional[RunActionOptions] = None,
    *,
    context: Optional[ExecutionContext] = None,
    registry_provider: Optional[ActionRegistryProvider] = None,
    confirm: Optional[ConfirmFn] = None,
) -> int:
    """Run one action end to end and return the process exit code."""
    opts = options or RunActionOptions()
    ctx = context or ExecutionContext.from_env()

    # Resolve
    if opts.registry is not None:
        registry = opts.registry
    else:
        registry = (registry_provider or ActionRegistryProvider(ctx.plugin_dir)).get()

    try:
        action = require_action(registry, action_name)
    except ResolutionError as e:
        log_event(
            "action_unknown",
            level=logging.WARNING,
            action=action_name,
            available=registry.action_ids(),
        )
        print_unknown_action(e, registry)
        return 1

    # Acquire inputs
    try:
        text, config = await asyncio.gather(_acquire_text(opts, ctx), get_config(ctx))
    except Exception as e:
        print(f"Error: {sanitize_error_message(str(e))}", file=sys.stderr)
        return 1

    provenance = capture_provenance(action, opts, ctx)
    provider = ProviderConfig.from_agent_config(config)
    latency_ms = 0
    outcome: Optional[RunOutcome] = None

    try:
        try:
            await enforce_safe_mode(config, yes=opts.yes, daemon_mode=ctx.daemon_mode, confirm=confirm)

            if action.progress_message:
                print(f"{action.progress_message}\n")

            ai = AIClient(provider)
            started = time.perf_counter()
            try:
                output = await action.run(
                    ActionContext(text=text, ai=ai, config=config, args=list(opts.args))
                )
            except Exception as e:
                raise ExecutionError(str(e) or type(e).__name__) from e
            finally:
                latency_ms = round((time.perf_counter() - started) * 1000)

            print_action_output(action, output)
            if opts.copy:
                copy_to_clipboard(output)
                print("\n(Copied to clipboard)")

            outcome = RunSuccess(output=output)
        except Exception as e:
            outcome = RunFailure(error=sanitize_error_message(str(e) or type(e).__name__))
    finally:
        await _record_run(
            _build_record(
                provenance=provenance,
                options=opts,
                provider=provider,
                text=text,
                latency_ms=latency_ms,
                outcome=outcome or RunFailure(error=INTERRUPTED_MESSAGE),
            ),
            ctx,
        )

    if isinstance(outcome, RunFailure):
        print(f"Error: {outcome.error}", file=sys.stderr)
        return 1
    return 0

