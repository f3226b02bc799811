from pathlib import Path

import pytest

from plugin_agent.llm.litellm import LiteLLM
from plugin_agent.prebuilt import (
    ConversationalReactAgent,
    NotConversationalReactAgent,
    _validate_litellm_environment,
    build_agent,
)
from plugin_agent.reasoner.react import CONVERSATIONAL, NOT_CONVERSATIONAL
from plugin_agent.tools.registry import InMemoryToolRegistry
from utils.config import LLM, Agent, Config

from tests.conftest import DummyRegistry

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("LLM_MODEL", "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(var, raising=False)


def test_validate_environment_requires_provider_key():
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        _validate_litellm_environment("gpt-4o-mini")


def test_validate_environment_accepts_explicit_api_key():
    _validate_litellm_environment("gpt-4o-mini", api_key="sk-test")


def test_validate_environment_accepts_env_key(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "x")
    _validate_litellm_environment("claude-sonnet-4")


def test_validate_environment_unknown_provider_is_left_to_litellm():
    _validate_litellm_environment("ollama/llama3")


def test_prebuilt_agents_pick_their_variant():
    registry = DummyRegistry()
    conv = ConversationalReactAgent(registry=registry, model="gpt-4o-mini", api_key="sk")
    plain = NotConversationalReactAgent(registry=registry, model="gpt-4o-mini", api_key="sk")

    assert conv.variant is CONVERSATIONAL
    assert plain.variant is NOT_CONVERSATIONAL
    assert isinstance(conv.llm, LiteLLM)
    assert conv.llm.model == "gpt-4o-mini"


def test_build_agent_from_config():
    config = Config(
        llm=LLM(model="gpt-4o-mini", temperature=0.0, timeout=15.0),
        agent=Agent(variant="conversational", tools_file="tools.yaml"),
    )

    agent = build_agent(config, base_dir=REPO_ROOT, api_key="sk-test")

    assert agent.variant is CONVERSATIONAL
    assert agent.llm.timeout == 15.0
    assert isinstance(agent.registry, InMemoryToolRegistry)


def test_build_agent_env_model_overrides_config(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "claude-sonnet-4")
    config = Config(llm=LLM(model="gpt-4o-mini"))

    agent = build_agent(config, api_key="sk-test")

    assert agent.llm.model == "claude-sonnet-4"


def test_build_agent_unknown_variant():
    config = Config(llm=LLM(model="gpt-4o-mini"), agent=Agent(variant="nope"))
    with pytest.raises(ValueError):
        build_agent(config, api_key="sk-test")
