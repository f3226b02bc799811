"""Turns a raw model completion into exactly one agent decision.

Both agent variants share one parse routine. A ``ParserPolicy`` carries the
points where they differ:

- ``strict_tool_resolution``: an unknown tool always raises, even when a final
  answer is available to fall back on.
- ``supports_early_answer``: a ``Positivity:`` score at or above
  ``early_answer_threshold`` with a non-empty final answer ends the step
  before any action is considered.
- ``rejects_none_action``: an action naming ``None`` (or nothing at all) is
  treated as no action.
- ``project_tool``: the decision carries a reduced copy of the descriptor
  instead of the registry's record.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from plugin_agent.exceptions import ToolNotFoundError
from plugin_agent.models import ActionDecision, AgentDecision, AnswerDecision, ToolDescriptor
from plugin_agent.reasoner.extract import (
    ACTION_INPUT,
    ACTION_LOOSE,
    ACTION_STRICT,
    AI_ANSWER,
    FINAL_ANSWER,
    POSITIVITY,
    THOUGHT,
    ExtractionRule,
    parse_leading_float,
    strip_quotes,
)

from utils.logger import get_logger
logger = get_logger(__name__)

_NONE_ACTION = "None"


@dataclass(frozen=True)
class ParserPolicy:
    strict_tool_resolution: bool
    supports_early_answer: bool
    rejects_none_action: bool
    project_tool: bool
    action_rule: ExtractionRule
    answer_rule: ExtractionRule
    trim_answer: bool
    early_answer_threshold: float = 9.0


CONVERSATIONAL_POLICY = ParserPolicy(
    strict_tool_resolution=True,
    supports_early_answer=False,
    rejects_none_action=False,
    project_tool=False,
    action_rule=ACTION_STRICT,
    answer_rule=AI_ANSWER,
    trim_answer=False,
)

NOT_CONVERSATIONAL_POLICY = ParserPolicy(
    strict_tool_resolution=False,
    supports_early_answer=True,
    rejects_none_action=True,
    project_tool=True,
    action_rule=ACTION_LOOSE,
    answer_rule=FINAL_ANSWER,
    trim_answer=True,
)


class ParseOutcome(Enum):
    EARLY_ANSWER = "EarlyAnswer"
    ACTION = "Action"
    FALLBACK_ANSWER = "FallbackAnswer"
    PLAIN_ANSWER = "PlainAnswer"


def resolve_tool(tools: Sequence[ToolDescriptor], name: str) -> Optional[ToolDescriptor]:
    """First descriptor whose ``name_for_model`` equals ``name`` exactly."""
    return next((t for t in tools if t.name_for_model == name), None)


def _candidate_answer(text: str, policy: ParserPolicy) -> str:
    answer = policy.answer_rule(text) or ""
    return answer.strip() if policy.trim_answer else answer


def _candidate_action(text: str, thought: str, policy: ParserPolicy) -> Optional[str]:
    raw_action = policy.action_rule(text)
    if not thought or raw_action is None:
        return None
    action = strip_quotes(raw_action.strip())
    if policy.rejects_none_action and (not action or _NONE_ACTION in action):
        return None
    return action


def parse_completion(tools: Sequence[ToolDescriptor], text: str, policy: ParserPolicy) -> AgentDecision:
    """Parse ``text`` into an action or an answer under ``policy``.

    Raises:
        ToolNotFoundError: the completion names a tool missing from ``tools`` and
            the policy gives no answer to fall back on.
    """
    answer = _candidate_answer(text, policy)

    if policy.supports_early_answer and answer:
        positivity = POSITIVITY(text)
        score = parse_leading_float(positivity) if positivity is not None else None
        if score is not None and score >= policy.early_answer_threshold:
            logger.info("parse_outcome", outcome=ParseOutcome.EARLY_ANSWER.value, positivity=score)
            return AnswerDecision(answer=answer)

    thought = (THOUGHT(text) or "").strip()
    action = _candidate_action(text, thought, policy)
    if action is None:
        logger.info("parse_outcome", outcome=ParseOutcome.PLAIN_ANSWER.value, answer_present=bool(answer))
        return AnswerDecision(answer=answer)

    tool = resolve_tool(tools, action)
    if tool is None:
        if not policy.strict_tool_resolution and answer:
            logger.warning("tool_not_found_fallback", tool_name=action)
            logger.info("parse_outcome", outcome=ParseOutcome.FALLBACK_ANSWER.value)
            return AnswerDecision(answer=answer)
        raise ToolNotFoundError(action)

    tool_input = strip_quotes((ACTION_INPUT(text) or "").strip())
    logger.info("parse_outcome", outcome=ParseOutcome.ACTION.value, tool=tool.name_for_model)
    return ActionDecision(
        thought=thought,
        tool=tool.project() if policy.project_tool else tool,
        tool_input=tool_input,
    )


def parse_conversational(tools: Sequence[ToolDescriptor], text: str) -> AgentDecision:
    return parse_completion(tools, text, CONVERSATIONAL_POLICY)


def parse_not_conversational(tools: Sequence[ToolDescriptor], text: str) -> AgentDecision:
    return parse_completion(tools, text, NOT_CONVERSATIONAL_POLICY)
