from plugin_agent.llm.base_llm import BaseLLM
from typing import List, Dict, Any
import litellm

from utils.logger import get_logger
from utils.observability import observe
logger = get_logger(__name__)

class LiteLLM(BaseLLM):
    """Wrapper around litellm.completion."""

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = 0.0,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(model=model, temperature=temperature)
        self.max_tokens = max_tokens
        self.timeout = timeout

    @observe(llm=True)
    def completion(self, messages: List[Dict[str, str]], **kwargs) -> BaseLLM.LLMResponse:
        # Merge default parameters with provided kwargs
        effective_temperature = kwargs.get("temperature", self.temperature)
        effective_max_tokens = kwargs.get("max_tokens", self.max_tokens)
        effective_timeout = kwargs.get("timeout", self.timeout)

        completion_kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if effective_temperature is not None:
            completion_kwargs["temperature"] = effective_temperature
        if effective_max_tokens is not None:
            completion_kwargs["max_tokens"] = effective_max_tokens
        if effective_timeout is not None:
            completion_kwargs["timeout"] = effective_timeout

        # Add any additional kwargs (like api_key); a None credential means provider env vars
        for key, value in kwargs.items():
            if key in ["temperature", "max_tokens", "timeout"]:
                continue
            if key == "api_key" and value is None:
                continue
            completion_kwargs[key] = value

        resp = litellm.completion(**completion_kwargs)

        text = ""
        try:
            text = resp.choices[0].message.content.strip()
        except (IndexError, AttributeError):
            logger.warning("llm_empty_response", model=self.model)

        prompt_tokens, completion_tokens, total_tokens = self._extract_token_usage(resp)

        return BaseLLM.LLMResponse(
            text=text,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
        )

    def _extract_token_usage(self, resp: Any) -> tuple[int | None, int | None, int | None]:
        """Extract token usage from provider response with fallbacks for different providers."""
        def _get_token(obj: Any, *keys: str) -> int | None:
            for key in keys:
                if isinstance(obj, dict):
                    val = obj.get(key)
                elif hasattr(obj, key):
                    val = getattr(obj, key, None)
                else:
                    continue
                if isinstance(val, int):
                    return val
            return None

        usage = getattr(resp, "usage", None) or (resp.get("usage") if isinstance(resp, dict) else None)
        if usage is None:
            return None, None, None

        prompt_tokens = _get_token(usage, "prompt_tokens", "input_tokens")
        completion_tokens = _get_token(usage, "completion_tokens", "output_tokens")
        total_tokens = _get_token(usage, "total_tokens")

        # Compute total if missing but components available
        if total_tokens is None and prompt_tokens is not None and completion_tokens is not None:
            total_tokens = prompt_tokens + completion_tokens

        return prompt_tokens, completion_tokens, total_tokens
