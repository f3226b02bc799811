"""Data models shared by the scratchpad builder, the parser and the agent."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

__all__ = [
    "ToolDescriptor",
    "Plugin",
    "AgentAction",
    "StepRecord",
    "DecisionKind",
    "ActionDecision",
    "AnswerDecision",
    "AgentDecision",
    "TaskExecutionContext",
]


@dataclass(frozen=True)
class ToolDescriptor:
    """Identifies one invocable tool. ``name_for_model`` is the identity key."""

    name_for_model: str
    name_for_human: str
    description_for_human: str
    description_for_model: str
    logo_url: Optional[str] = None
    display_for_user: bool = True

    def project(self) -> ToolDescriptor:
        """Return a plain descriptor holding only the descriptor fields."""
        return ToolDescriptor(**{f.name: getattr(self, f.name) for f in fields(ToolDescriptor)})


@dataclass(frozen=True)
class Plugin(ToolDescriptor):
    """Full registry record; the extra fields never leave the registry side."""

    id: str = ""
    api_url: Optional[str] = None
    manifest_url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass(frozen=True)
class AgentAction:
    thought: str
    tool: ToolDescriptor
    tool_input: str


@dataclass(frozen=True)
class StepRecord:
    """One executed turn: the action taken and what the tool returned."""

    action: AgentAction
    observation: str

    @classmethod
    def from_decision(cls, decision: ActionDecision, observation: str) -> StepRecord:
        return cls(
            action=AgentAction(thought=decision.thought, tool=decision.tool, tool_input=decision.tool_input),
            observation=observation,
        )


class DecisionKind(Enum):
    ACTION = "action"
    ANSWER = "answer"


@dataclass(frozen=True)
class ActionDecision:
    thought: str
    tool: ToolDescriptor
    tool_input: str

    @property
    def kind(self) -> DecisionKind:
        return DecisionKind.ACTION


@dataclass(frozen=True)
class AnswerDecision:
    answer: str

    @property
    def kind(self) -> DecisionKind:
        return DecisionKind.ANSWER


AgentDecision = Union[ActionDecision, AnswerDecision]


@dataclass(frozen=True)
class TaskExecutionContext:
    """Per-step caller context handed to the registry and the model client."""

    api_key: Optional[str] = None
    conversation_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
