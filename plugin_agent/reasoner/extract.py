"""Named extraction rules over raw model completions.

Each rule is a pure function from the completion text to an optional captured
span. ``None`` means the marker is absent; an empty string means the marker is
present with nothing after it. All "rest of line" rules stop at the first
``\n`` or ``\r``, so a capture never spans two lines and CRLF completions read
like LF ones.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

__all__ = [
    "ExtractionRule",
    "THOUGHT",
    "ACTION_STRICT",
    "ACTION_LOOSE",
    "ACTION_INPUT",
    "AI_ANSWER",
    "FINAL_ANSWER",
    "POSITIVITY",
    "strip_quotes",
    "parse_leading_float",
]

_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ExtractionRule:
    name: str
    pattern: re.Pattern
    description: str

    def __call__(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        return match.group(1) if match else None


THOUGHT = ExtractionRule(
    "thought",
    re.compile(r"([^\r\n]*)\r?\nAction:"),
    "the single line directly above the first line that starts with 'Action:'",
)
ACTION_STRICT = ExtractionRule("action", re.compile(r"Action: ([^\r\n]*)"), "rest of line after the first 'Action: '")
ACTION_LOOSE = ExtractionRule("action", re.compile(r"Action:([^\r\n]*)"), "rest of line after the first 'Action:'")
ACTION_INPUT = ExtractionRule(
    "action_input", re.compile(r"Action Input: ([^\r\n]*)"), "rest of line after 'Action Input: '"
)
AI_ANSWER = ExtractionRule("ai_answer", re.compile(r"AI:([^\r\n]*)"), "rest of line after the first 'AI:'")
FINAL_ANSWER = ExtractionRule(
    "final_answer", re.compile(r"Final Answer:([^\r\n]*)"), "rest of line after 'Final Answer:'"
)
POSITIVITY = ExtractionRule(
    "positivity",
    re.compile(r"\nPositivity:([^\r\n]*)"),
    "rest of line after 'Positivity:' at the start of a line other than the first",
)


def _unwrap(text: str, quote: str) -> str:
    if len(text) >= 2 and text.startswith(quote) and text.endswith(quote):
        return text[1:-1]
    return text


def strip_quotes(text: str) -> str:
    """Remove one surrounding pair of double quotes, then one of single quotes."""
    return _unwrap(_unwrap(text, '"'), "'")


def parse_leading_float(text: str) -> Optional[float]:
    """Value of the decimal literal at the start of ``text``, ignoring surrounding whitespace.

    Trailing garbage is ignored (``"9.5/10"`` -> 9.5); no leading number gives None.
    """
    match = _FLOAT_PATTERN.match(text.strip())
    return float(match.group(0)) if match else None
