from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from plugin_agent.models import StepRecord

SCRATCHPAD_CUE = "Thought:"
_FENCE = '"""'


@dataclass(frozen=True)
class ScratchpadStyle:
    marker_space: str
    fence_after_lines: int | None = None


CONVERSATIONAL_STYLE = ScratchpadStyle(marker_space="")
NOT_CONVERSATIONAL_STYLE = ScratchpadStyle(marker_space=" ", fence_after_lines=5)


def _format_observation(observation: str, style: ScratchpadStyle) -> str:
    if style.fence_after_lines is not None and len(observation.split("\n")) > style.fence_after_lines:
        return f"{_FENCE}\n{observation}\n{_FENCE}"
    return observation


def build_scratchpad(records: Sequence[StepRecord], style: ScratchpadStyle) -> str:
    """Render prior turns in the order given, ending with the bare ``Thought:`` cue.

    Model-produced text is written verbatim; nothing is escaped.
    """
    sp = style.marker_space
    parts: List[str] = []
    for record in records:
        action = record.action
        parts.append(
            f"Thought:{sp}{action.thought}\n"
            f"Action:{sp}{action.tool.name_for_model}\n"
            f"Action Input: {action.tool_input}\n"
            f"Observation: {_format_observation(record.observation, style)}\n"
        )
    parts.append(SCRATCHPAD_CUE)
    return "".join(parts)
