from .base import ToolRegistryBase
from .registry import InMemoryToolRegistry

__all__ = ["ToolRegistryBase", "InMemoryToolRegistry"]
