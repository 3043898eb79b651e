"""Action definition and execution context types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

if TYPE_CHECKING:
    from ..ai.client import AIClient
    from ..ipc.types import ConfigResponse


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Everything an action's ``run`` receives."""

    text: str
    ai: "AIClient | Any"
    config: "ConfigResponse"
    args: list[str] = field(default_factory=list)


ActionRunner = Callable[[ActionContext], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class ActionDefinition:
    """A named unit of work that turns input text into output text."""

    id: str
    description: str
    output_title: str
    run: ActionRunner
    aliases: tuple[str, ...] = ()
    progress_message: Optional[str] = None

    @property
    def names(self) -> tuple[str, ...]:
        """The id followed by every alias."""
        return (self.id, *self.aliases)
