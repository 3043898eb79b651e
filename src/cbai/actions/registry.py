"""Action registry: strict static construction and lenient plugin merging."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from ..errors import RegistryConstructionError
from ..logging import log_event, warn
from .builtin import BUILTIN_ACTIONS
from .plugins import load_plugin_actions
from .types import ActionDefinition


@dataclass(frozen=True, slots=True)
class ActionRegistry:
    """Immutable lookup view over a set of actions."""

    actions: tuple[ActionDefinition, ...]
    by_id: Mapping[str, ActionDefinition]
    by_alias: Mapping[str, ActionDefinition]

    def action_ids(self) -> list[str]:
        """All action ids, sorted."""
        return sorted(self.by_id)


def create_action_registry(actions: Iterable[ActionDefinition]) -> ActionRegistry:
    """Build a registry, failing on any duplicate id or alias.

    Raises:
        RegistryConstructionError: If two actions share an id, or any id/alias
            of one action equals an id/alias of another
    """
    ordered = tuple(actions)
    by_id: dict[str, ActionDefinition] = {}
    by_alias: dict[str, ActionDefinition] = {}

    for action in ordered:
        if action.id in by_id:
            raise RegistryConstructionError(f'Duplicate action id "{action.id}"')

        for name in action.names:
            owner = by_alias.get(name)
            if owner is not None and owner is not action:
                raise RegistryConstructionError(
                    f'Action name "{name}" of "{action.id}" is already used by "{owner.id}"'
                )
            by_alias[name] = action

        by_id[action.id] = action

    return ActionRegistry(
        actions=ordered,
        by_id=MappingProxyType(by_id),
        by_alias=MappingProxyType(by_alias),
    )


def resolve_action(registry: ActionRegistry, name: str) -> Optional[ActionDefinition]:
    """Look up an action by id or alias; ``None`` when unknown."""
    return registry.by_alias.get(name)


def merge_plugin_actions(
    builtin_actions: Sequence[ActionDefinition],
    plugin_actions: Sequence[ActionDefinition],
) -> list[ActionDefinition]:
    """Return the plugin actions that can join the built-ins without collisions.

    Built-ins always win. A plugin whose id or any alias is already taken, by
    a built-in or by an earlier accepted plugin, is rejected as a whole.
    """
    used: set[str] = {name for action in builtin_actions for name in action.names}
    accepted: list[ActionDefinition] = []

    for plugin in plugin_actions:
        conflicts = list(dict.fromkeys(name for name in plugin.names if name in used))
        if conflicts:
            warn(
                f'Skipping plugin action "{plugin.id}": name conflict with '
                + ", ".join(f'"{name}"' for name in conflicts),
                "plugin_conflict",
                action=plugin.id,
                conflicts=conflicts,
            )
            continue

        accepted.append(plugin)
        used.update(plugin.names)

    return accepted


PluginLoader = Callable[[Path], Sequence[ActionDefinition]]


class ActionRegistryProvider:
    """Builds the merged built-in + plugin registry once and memoizes it."""

    def __init__(
        self,
        plugin_dir: Path,
        builtin_actions: Sequence[ActionDefinition] = BUILTIN_ACTIONS,
        loader: PluginLoader = load_plugin_actions,
    ):
        self.plugin_dir = Path(plugin_dir)
        self._builtin_actions = tuple(builtin_actions)
        self._loader = loader
        self._registry: Optional[ActionRegistry] = None

    @property
    def is_built(self) -> bool:
        return self._registry is not None

    def get(self) -> ActionRegistry:
        """Return the merged registry, building it on first use."""
        if self._registry is None:
            plugins = list(self._loader(self.plugin_dir))
            accepted = merge_plugin_actions(self._builtin_actions, plugins)
            self._registry = create_action_registry([*self._builtin_actions, *accepted])
            log_event(
                "registry_built",
                level=logging.INFO,
                builtin_count=len(self._builtin_actions),
                plugin_count=len(accepted),
                rejected_count=len(plugins) - len(accepted),
                plugin_dir=self.plugin_dir,
            )
        return self._registry


# Constructed at import so a collision among built-ins fails immediately.
default_action_registry = create_action_registry(BUILTIN_ACTIONS)
