"""Action definitions, built-ins, plugin loading, and the action registry."""

from .builtin import BUILTIN_ACTIONS
from .plugins import SUPPORTED_PLUGIN_EXTENSIONS, load_plugin_actions
from .registry import (
    ActionRegistry,
    ActionRegistryProvider,
    create_action_registry,
    default_action_registry,
    merge_plugin_actions,
    resolve_action,
)
from .types import ActionContext, ActionDefinition, ActionRunner

__all__ = [
    "BUILTIN_ACTIONS",
    "SUPPORTED_PLUGIN_EXTENSIONS",
    "ActionContext",
    "ActionDefinition",
    "ActionRegistry",
    "ActionRegistryProvider",
    "ActionRunner",
    "create_action_registry",
    "default_action_registry",
    "load_plugin_actions",
    "merge_plugin_actions",
    "resolve_action",
]
