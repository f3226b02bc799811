import os
from pathlib import Path

from plugin_agent.llm.litellm import LiteLLM
from plugin_agent.reasoner.observer import InvocationObserver
from plugin_agent.reasoner.react import CONVERSATIONAL, NOT_CONVERSATIONAL, ReactAgent, get_variant
from plugin_agent.tools.base import ToolRegistryBase
from plugin_agent.tools.registry import InMemoryToolRegistry
from utils.config import Config


def _validate_litellm_environment(model: str | None = None, api_key: str | None = None) -> None:
    """
    Validate environment variables for LiteLLM based on the model being used.

    An explicit ``api_key`` (normally the one carried on the task context)
    makes provider environment variables unnecessary.

    Raises:
        ValueError: If required environment variables are missing
    """
    if api_key:
        return
    if not model:
        model = os.getenv("LLM_MODEL")
        if not model:
            # BaseLLM will handle this error, so we don't need to validate here
            return

    provider_env_vars = {
        "gpt": ["OPENAI_API_KEY"],
        "claude": ["ANTHROPIC_API_KEY"],
        "gemini": ["GEMINI_API_KEY", "GOOGLE_API_KEY"],
        "command": ["COHERE_API_KEY"],
        "mistral": ["MISTRAL_API_KEY"],
        "azure": ["AZURE_API_KEY", "AZURE_API_BASE"],
        "bedrock": ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"],
    }

    model_lower = model.lower()
    required_vars = next((env_vars for prefix, env_vars in provider_env_vars.items() if prefix in model_lower), [])
    if not required_vars:
        # Unknown provider; let litellm report what it needs
        return

    if not any(os.getenv(var) for var in required_vars):
        raise ValueError(
            f"Missing required environment variables for model '{model}'. "
            f"Please set one of: {', '.join(required_vars)}"
        )


class ConversationalReactAgent(ReactAgent):
    """
    A pre-configured ReactAgent for chat-style turns.

    Unknown tools named by the model always raise; answers come from the
    ``AI:`` line.
    """

    def __init__(
        self,
        *,
        registry: ToolRegistryBase,
        model: str | None = None,
        api_key: str | None = None,
        observer: InvocationObserver | None = None,
    ):
        _validate_litellm_environment(model, api_key)
        super().__init__(llm=LiteLLM(model=model), registry=registry, variant=CONVERSATIONAL, observer=observer)


class NotConversationalReactAgent(ReactAgent):
    """
    A pre-configured ReactAgent for question answering.

    Supports the confident early answer and falls back to a final answer when
    the model names an unknown tool.
    """

    def __init__(
        self,
        *,
        registry: ToolRegistryBase,
        model: str | None = None,
        api_key: str | None = None,
        observer: InvocationObserver | None = None,
    ):
        _validate_litellm_environment(model, api_key)
        super().__init__(llm=LiteLLM(model=model), registry=registry, variant=NOT_CONVERSATIONAL, observer=observer)


def build_agent(config: Config, *, base_dir: str | Path = ".", api_key: str | None = None) -> ReactAgent:
    """Assemble an agent from the ``[llm]`` and ``[agent]`` config sections."""
    model = os.getenv("LLM_MODEL") or config.llm.model
    _validate_litellm_environment(model, api_key)

    registry = InMemoryToolRegistry()
    if config.agent.tools_file:
        registry = InMemoryToolRegistry.from_yaml(Path(base_dir) / config.agent.tools_file)

    llm = LiteLLM(
        model=model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
        timeout=config.llm.timeout,
    )
    return ReactAgent(llm=llm, registry=registry, variant=get_variant(config.agent.variant))
