from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from plugin_agent.llm.base_llm import BaseLLM
from plugin_agent.models import AgentDecision, StepRecord, TaskExecutionContext, ToolDescriptor
from plugin_agent.prompts import load_template
from plugin_agent.reasoner.observer import InvocationObserver, LoggingObserver
from plugin_agent.reasoner.parser import CONVERSATIONAL_POLICY, NOT_CONVERSATIONAL_POLICY, ParserPolicy, parse_completion
from plugin_agent.reasoner.scratchpad import CONVERSATIONAL_STYLE, NOT_CONVERSATIONAL_STYLE, ScratchpadStyle, build_scratchpad
from plugin_agent.tools.base import ToolRegistryBase

from utils.logger import get_logger, trace_method
from utils.observability import observe
logger = get_logger(__name__)


@dataclass(frozen=True)
class AgentVariant:
    """Everything that differs between the conversational and non-conversational agents."""

    name: str
    prompt_profile: str
    scratchpad_style: ScratchpadStyle
    tool_names_separator: str
    policy: ParserPolicy


CONVERSATIONAL = AgentVariant(
    name="conversational",
    prompt_profile="conversational",
    scratchpad_style=CONVERSATIONAL_STYLE,
    tool_names_separator=",",
    policy=CONVERSATIONAL_POLICY,
)

NOT_CONVERSATIONAL = AgentVariant(
    name="not_conversational",
    prompt_profile="not_conversational",
    scratchpad_style=NOT_CONVERSATIONAL_STYLE,
    tool_names_separator=", ",
    policy=NOT_CONVERSATIONAL_POLICY,
)

VARIANTS: Dict[str, AgentVariant] = {v.name: v for v in (CONVERSATIONAL, NOT_CONVERSATIONAL)}


def get_variant(name: str) -> AgentVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown agent variant '{name}'. Expected one of: {', '.join(VARIANTS)}") from None


def tool_descriptions(tools: Sequence[ToolDescriptor]) -> str:
    return "\n".join(f"{t.name_for_model}: {t.description_for_model}" for t in tools)


def tool_names(tools: Sequence[ToolDescriptor], separator: str) -> str:
    return separator.join(t.name_for_model for t in tools)


class ReactAgent:
    """Runs one ReAct step: scratchpad, prompt, one model call, parse.

    The agent keeps no conversation state. The caller owns the list of
    ``StepRecord`` objects, executes any tool the decision names, and appends
    the resulting record before the next call.
    """

    def __init__(
        self,
        *,
        llm: BaseLLM,
        registry: ToolRegistryBase,
        variant: AgentVariant = NOT_CONVERSATIONAL,
        observer: InvocationObserver | None = None,
    ) -> None:
        self.llm = llm
        self.registry = registry
        self.variant = variant
        self.observer = observer
        self.template = load_template(variant.prompt_profile)

    @trace_method
    def render_prompt(self, tools: Sequence[ToolDescriptor], user_input: str, records: Sequence[StepRecord]) -> str:
        return self.template.format(
            tool_descriptions=tool_descriptions(tools),
            tool_names=tool_names(tools, self.variant.tool_names_separator),
            input=user_input,
            agent_scratchpad=build_scratchpad(records, self.variant.scratchpad_style),
        )

    @observe(root=True)
    def step(
        self,
        context: TaskExecutionContext,
        enabled_tools: Sequence[str],
        user_input: str,
        records: Sequence[StepRecord] = (),
        verbose: bool = False,
    ) -> AgentDecision:
        """Decide the next action or the final answer for ``user_input``.

        Raises:
            ToolNotFoundError: an enabled tool is unknown to the registry, or the
                completion names an unknown tool and the variant cannot fall back.
        """
        logger.info(
            "react_step_start",
            variant=self.variant.name,
            conversation_id=context.conversation_id,
            prior_steps=len(records),
        )
        tools: List[ToolDescriptor] = list(self.registry.list_tools(context, enabled_tools))
        prompt = self.render_prompt(tools, user_input, records)

        observer: Optional[InvocationObserver] = self.observer or (LoggingObserver() if verbose else None)
        if observer:
            observer.on_invocation_start(prompt)
        try:
            completion = self.llm.prompt(prompt, api_key=context.api_key)
        except Exception as exc:
            if observer:
                observer.on_invocation_error(exc)
            raise
        if observer:
            observer.on_invocation_end(completion)

        decision = parse_completion(tools, completion, self.variant.policy)
        logger.info("react_step_complete", variant=self.variant.name, decision=decision.kind.value)
        return decision
