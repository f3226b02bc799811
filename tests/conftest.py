import pytest
from typing import Dict, List, Sequence

from plugin_agent.llm.base_llm import BaseLLM
from plugin_agent.models import AgentAction, Plugin, StepRecord, TaskExecutionContext, ToolDescriptor
from plugin_agent.tools.base import ToolRegistryBase


class DummyLLM(BaseLLM):
    def __init__(self, *, text_queue: List[str] | None = None, error: Exception | None = None):
        # Intentionally do not call super().__init__ to avoid model env requirement
        self.text_queue = list(text_queue or [])
        self.error = error
        self.calls: List[Dict[str, object]] = []

    def completion(self, messages: List[Dict[str, str]], **kwargs) -> BaseLLM.LLMResponse:  # type: ignore[override]
        self.calls.append({"messages": messages, **kwargs})
        if self.error is not None:
            raise self.error
        if not self.text_queue:
            return BaseLLM.LLMResponse(text="")
        return BaseLLM.LLMResponse(text=self.text_queue.pop(0))


class DummyRegistry(ToolRegistryBase):
    def __init__(self, tools: Sequence[ToolDescriptor] | None = None):
        self._tools = list(tools or [])
        self.last_enabled: List[str] | None = None

    def list_tools(self, context: TaskExecutionContext, enabled: Sequence[str]) -> List[ToolDescriptor]:
        self.last_enabled = list(enabled)
        return [t for t in self._tools if t.name_for_model in enabled]


def make_plugin(name: str, description: str = "", **kwargs) -> Plugin:
    return Plugin(
        name_for_model=name,
        name_for_human=name.replace("_", " ").title(),
        description_for_human=description or f"Human help for {name}",
        description_for_model=description or f"Model help for {name}",
        id=kwargs.pop("id", name),
        **kwargs,
    )


def make_record(tool: ToolDescriptor, thought: str, tool_input: str, observation: str) -> StepRecord:
    return StepRecord(action=AgentAction(thought=thought, tool=tool, tool_input=tool_input), observation=observation)


@pytest.fixture
def web_search() -> Plugin:
    return make_plugin(
        "web_search",
        api_url="https://search.internal/api",
        manifest_url="https://search.internal/.well-known/ai-plugin.json",
        extra={"auth": "service_http"},
    )


@pytest.fixture
def calculator() -> Plugin:
    return make_plugin("calculator", logo_url="https://example.com/calc.png", display_for_user=False)


@pytest.fixture
def tools(web_search: Plugin, calculator: Plugin) -> List[Plugin]:
    return [web_search, calculator]


@pytest.fixture
def context() -> TaskExecutionContext:
    return TaskExecutionContext(api_key="sk-test", conversation_id="conv-1")
