"""List every action the CLI can run."""

from __future__ import annotations

from ..actions import BUILTIN_ACTIONS, ActionRegistryProvider


async def actions_command(registry_provider: ActionRegistryProvider) -> int:
    registry = registry_provider.get()
    builtin_ids = {action.id for action in BUILTIN_ACTIONS}

    print("Available actions")
    print("─────────────────")
    for action_id in registry.action_ids():
        action = registry.by_id[action_id]
        aliases = f" ({', '.join(action.aliases)})" if action.aliases else ""
        origin = "" if action_id in builtin_ids else " [plugin]"
        print(f"  {action_id}{aliases}{origin}: {action.description}")
    return 0
