"""Optional hooks around the model call of an agent step."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Optional

from utils.logger import get_logger
logger = get_logger(__name__)


class InvocationObserver(ABC):
    """Receives the rendered prompt before the model call and the completion after it."""

    @abstractmethod
    def on_invocation_start(self, prompt: str) -> None: ...

    @abstractmethod
    def on_invocation_end(self, completion: str) -> None: ...

    def on_invocation_error(self, error: Exception) -> None:
        """Called instead of ``on_invocation_end`` when the model call raises."""


class LoggingObserver(InvocationObserver):
    """Traces prompt/response pairs and latency through the structured logger.

    Holds the start time of the current call, so give each concurrently running
    agent its own instance.
    """

    def __init__(self) -> None:
        self._started_at: Optional[float] = None
        self.last_elapsed: Optional[float] = None

    def on_invocation_start(self, prompt: str) -> None:
        self._started_at = time.perf_counter()
        logger.info("llm_invocation_start", prompt=prompt)

    def _stop_clock(self) -> Optional[float]:
        if self._started_at is not None:
            self.last_elapsed = time.perf_counter() - self._started_at
            self._started_at = None
        return round(self.last_elapsed, 3) if self.last_elapsed is not None else None

    def on_invocation_end(self, completion: str) -> None:
        logger.info("llm_invocation_end", elapsed_seconds=self._stop_clock(), completion=completion)

    def on_invocation_error(self, error: Exception) -> None:
        logger.warning(
            "llm_invocation_failed",
            elapsed_seconds=self._stop_clock(),
            error_type=type(error).__name__,
            error=str(error),
        )
