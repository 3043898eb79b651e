"""Domain value objects."""

from .config import ProviderConfig

__all__ = ["ProviderConfig"]
