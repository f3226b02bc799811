"""CLI utility functions for user interaction."""
import sys

from plugin_agent.models import ActionDecision, AgentDecision


def read_line(prompt: str) -> str:
    """Read one line from stdin; EOF or an exit word ends the session."""
    print(prompt, end="", flush=True)
    line = sys.stdin.readline()
    if not line:  # EOF
        raise KeyboardInterrupt

    text = line.strip()
    if text.lower() in {"bye", "quit", "exit", "q"}:
        raise KeyboardInterrupt
    return text


def read_user_goal(prompt: str = "🤖 Enter your goal: ") -> str:
    return read_line(prompt)


def read_observation(decision: ActionDecision) -> str:
    """Ask the human to stand in for the tool and type its result."""
    return read_line(f"🔧 Result of {decision.tool.name_for_model}({decision.tool_input!r}): ")


def print_decision(decision: AgentDecision) -> None:
    """Print the agent decision to stdout."""
    if isinstance(decision, ActionDecision):
        print(f"💭 **Thought:** {decision.thought}")
        print(f"➡️  **Action:** {decision.tool.name_for_human} ({decision.tool.name_for_model})")
        print(f"   Input: {decision.tool_input}")
    else:
        print(f"✅ **Answer:** {decision.answer.strip() or '(empty answer)'}")
