"""Discovery and normalization of user-supplied plugin actions.

A plugin is a Python file placed directly in the plugin directory. It is
recognized when it exposes one of these shapes (tried in order):

1. a module attribute ``default`` holding an action shape
2. a module attribute ``action`` holding an action shape
3. a ``metadata`` mapping plus a module-level ``run`` callable
4. top-level ``id`` and ``run`` attributes on the module itself

An action shape is a mapping or object with ``id`` and ``run`` and,
optionally, ``aliases``, ``description``, ``output_title`` and
``progress_message`` (camelCase spellings are accepted too). ``run`` receives
an ``ActionContext`` and may be sync or async.
"""

from __future__ import annotations

import importlib.util
import inspect
import re
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional

from ..logging import warn
from .types import ActionContext, ActionDefinition, ActionRunner

SUPPORTED_PLUGIN_EXTENSIONS = frozenset({".py"})

_MODULE_PREFIX = "cbai_plugin_"


def _field(candidate: Any, *names: str) -> Any:
    """Read the first present field from a mapping or attribute-bearing object."""
    for name in names:
        if isinstance(candidate, Mapping):
            if name in candidate:
                return candidate[name]
        else:
            value = getattr(candidate, name, None)
            if value is not None:
                return value
    return None


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _as_async_runner(run: Callable[[ActionContext], Any]) -> ActionRunner:
    async def runner(ctx: ActionContext) -> str:
        result = run(ctx)
        if inspect.isawaitable(result):
            result = await result
        return "" if result is None else str(result)

    return runner


def normalize_plugin_candidate(value: Any) -> Optional[ActionDefinition]:
    """Validate one action shape and fill in display defaults."""
    if value is None or isinstance(value, (str, bytes, int, float, bool)):
        return None

    plugin_id = _non_empty_str(_field(value, "id"))
    if plugin_id is None:
        return None

    run = _field(value, "run")
    if not callable(run):
        return None

    raw_aliases = _field(value, "aliases")
    aliases: tuple[str, ...] = ()
    if isinstance(raw_aliases, (list, tuple)):
        aliases = tuple(alias for alias in raw_aliases if isinstance(alias, str))

    progress = _field(value, "progress_message", "progressMessage")

    return ActionDefinition(
        id=plugin_id,
        aliases=aliases,
        description=_non_empty_str(_field(value, "description")) or f"Plugin action: {plugin_id}",
        output_title=_non_empty_str(_field(value, "output_title", "outputTitle")) or plugin_id,
        progress_message=progress if isinstance(progress, str) else None,
        run=_as_async_runner(run),
    )


def normalize_plugin_module(module: ModuleType) -> Optional[ActionDefinition]:
    """Try each recognized export shape in order."""
    for attribute in ("default", "action"):
        candidate = normalize_plugin_candidate(getattr(module, attribute, None))
        if candidate is not None:
            return candidate

    metadata = getattr(module, "metadata", None)
    run = getattr(module, "run", None)
    if isinstance(metadata, Mapping) and run is not None:
        candidate = normalize_plugin_candidate({**metadata, "run": run})
        if candidate is not None:
            return candidate

    return normalize_plugin_candidate(module)


def _import_plugin_module(path: Path, index: int) -> ModuleType:
    # Sanitized stems can collide (a-b, a_b); the index keeps module names distinct.
    stem = re.sub(r"\W", "_", path.stem)
    module_name = f"{_MODULE_PREFIX}{index}_{stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot create module spec for {path.name}")

    module = importlib.util.module_from_spec(spec)
    # Must be in sys.modules before exec_module for dataclasses defined in plugins.
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def list_plugin_files(plugin_dir: Path) -> list[Path]:
    """Plugin candidates directly inside the directory, in lexicographic order."""
    return sorted(
        (
            entry
            for entry in plugin_dir.iterdir()
            if entry.is_file() and entry.suffix in SUPPORTED_PLUGIN_EXTENSIONS
        ),
        key=lambda entry: entry.name,
    )


def load_plugin_actions(plugin_dir: Path | str) -> list[ActionDefinition]:
    """Load every valid plugin action; failures are warned about and skipped."""
    directory = Path(plugin_dir)
    if not directory.is_dir():
        return []

    try:
        files = list_plugin_files(directory)
    except OSError as e:
        warn(
            f"Could not read plugin directory {directory}: {e}",
            "plugin_load_failed",
            plugin_file=directory,
            error_type=type(e).__name__,
        )
        return []

    actions: list[ActionDefinition] = []
    for index, path in enumerate(files):
        try:
            candidate = normalize_plugin_module(_import_plugin_module(path, index))
        except (Exception, SystemExit) as e:
            warn(
                f"Failed to load plugin {path.name}: {e}",
                "plugin_load_failed",
                plugin_file=path,
                error_type=type(e).__name__,
            )
            continue

        if candidate is None:
            warn(
                f"Skipping plugin {path.name}: invalid action export",
                "plugin_skipped",
                plugin_file=path,
                reason="invalid_action_export",
            )
            continue

        actions.append(candidate)

    return actions
