"""Lightweight LLM wrapper interface used by the agent step."""
from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Optional

from utils.logger import get_logger
logger = get_logger(__name__)


class BaseLLM(ABC):
    """Minimal synchronous chat‑LLM interface.

    • Accepts a list[dict] *messages* like the OpenAI Chat format.
    • Returns an ``LLMResponse`` holding the assistant reply and token usage.
    • Implementations SHOULD be stateless; the model name is given at init and
      the API credential may be passed per call.
    """

    @dataclass
    class LLMResponse:
        text: str
        prompt_tokens: Optional[int] = None
        completion_tokens: Optional[int] = None
        total_tokens: Optional[int] = None

    def __init__(self, model: str | None = None, temperature: float | None = 0.0) -> None:
        self.model = model or os.getenv("LLM_MODEL")
        if not self.model:
            raise ValueError("No model configured. Pass `model` or set the LLM_MODEL environment variable.")
        self.temperature = temperature

    @abstractmethod
    def completion(self, messages: List[Dict[str, str]], **kwargs) -> BaseLLM.LLMResponse: ...

    def prompt(self, content: str, **kwargs) -> str:
        """Convenience method for single user prompts."""
        return self.completion([{"role": "user", "content": content}], **kwargs).text
