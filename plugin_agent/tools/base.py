"""Abstract interface for a tool registry."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from plugin_agent.models import TaskExecutionContext, ToolDescriptor


class ToolRegistryBase(ABC):
    """Abstract contract for a backend that lists the tools active for a step."""

    @abstractmethod
    def list_tools(self, context: TaskExecutionContext, enabled: Sequence[str]) -> List[ToolDescriptor]:
        """Return the descriptors for ``enabled`` tool identifiers, in prompt order."""
        raise NotImplementedError
