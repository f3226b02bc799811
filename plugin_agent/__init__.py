"""Single-step ReAct agent over a registry of plugins."""

from plugin_agent.exceptions import AgentError, ToolNotFoundError
from plugin_agent.models import (
    ActionDecision,
    AgentAction,
    AgentDecision,
    AnswerDecision,
    DecisionKind,
    Plugin,
    StepRecord,
    TaskExecutionContext,
    ToolDescriptor,
)
from plugin_agent.reasoner.parser import parse_conversational, parse_not_conversational
from plugin_agent.reasoner.react import CONVERSATIONAL, NOT_CONVERSATIONAL, ReactAgent

__all__ = [
    "AgentError",
    "ToolNotFoundError",
    "ActionDecision",
    "AgentAction",
    "AgentDecision",
    "AnswerDecision",
    "DecisionKind",
    "Plugin",
    "StepRecord",
    "TaskExecutionContext",
    "ToolDescriptor",
    "parse_conversational",
    "parse_not_conversational",
    "CONVERSATIONAL",
    "NOT_CONVERSATIONAL",
    "ReactAgent",
]
