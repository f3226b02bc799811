from __future__ import annotations

from utils.logger import get_logger

logger = get_logger(__name__)


class AgentError(Exception):
    """Base exception for all agent step errors."""

    def __init__(self, message: str):
        super().__init__(message)
        logger.warning(
            "agent_error",
            error_type=self.__class__.__name__,
            message=message,
        )


class ToolNotFoundError(AgentError):
    """A tool reference does not match any descriptor in the active tool set."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")
