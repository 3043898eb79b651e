"""Lightweight configuration value objects built from the agent's config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from ..ipc.types import ConfigResponse


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """How to reach a text-generation backend."""

    type: str
    model: str
    endpoint: Optional[str] = None
    api_key: Optional[str] = None

    @classmethod
    def from_mapping(cls, provider: Mapping[str, Any]) -> "ProviderConfig":
        """Build from a ``provider`` block; empty strings count as absent."""
        return cls(
            type=str(provider.get("type") or ""),
            model=str(provider.get("model") or ""),
            endpoint=_optional_str(provider.get("endpoint")),
            api_key=_optional_str(provider.get("api_key")),
        )

    @classmethod
    def from_agent_config(cls, config: "ConfigResponse") -> "ProviderConfig":
        """Build from the full agent configuration response."""
        return cls.from_mapping(config.get("provider") or {})

    def __repr__(self) -> str:
        # Keep the API key out of tracebacks and logs.
        key = "***" if self.api_key else None
        return (
            f"ProviderConfig(type={self.type!r}, model={self.model!r}, "
            f"endpoint={self.endpoint!r}, api_key={key!r})"
        )
