from .parser import CONVERSATIONAL_POLICY, NOT_CONVERSATIONAL_POLICY, ParserPolicy, parse_completion
from .scratchpad import build_scratchpad

__all__ = ["CONVERSATIONAL_POLICY", "NOT_CONVERSATIONAL_POLICY", "ParserPolicy", "parse_completion", "build_scratchpad"]
