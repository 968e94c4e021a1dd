"""Token registry collaborator: interface and in-memory implementation."""

from .base import TokenRegistry
from .memory import InMemoryTokenRegistry

__all__ = [
    "TokenRegistry",
    "InMemoryTokenRegistry",
]
