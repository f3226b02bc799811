import pytest

from plugin_agent.reasoner.extract import (
    ACTION_INPUT,
    ACTION_LOOSE,
    ACTION_STRICT,
    AI_ANSWER,
    FINAL_ANSWER,
    POSITIVITY,
    THOUGHT,
    parse_leading_float,
    strip_quotes,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"foo"', "foo"),
        ("'foo'", "foo"),
        ("foo", "foo"),
        ('"it\'s"', "it's"),
        ("\"'both'\"", "both"),
        ('""', ""),
        ('"', '"'),
        ('"unbalanced', '"unbalanced'),
        ('say "hi" now', 'say "hi" now'),
    ],
)
def test_strip_quotes(raw, expected):
    assert strip_quotes(raw) == expected


@pytest.mark.parametrize("raw", ['"foo"', "'foo'", "foo", '"it\'s"'])
def test_strip_quotes_is_idempotent_after_first_pass(raw):
    once = strip_quotes(raw)
    assert strip_quotes(once) == once


def test_thought_is_the_line_directly_above_action():
    text = "First line\nI should search.\nAction: web_search\nAction Input: q"
    assert THOUGHT(text) == "I should search."


def test_thought_missing_without_newline_before_action():
    assert THOUGHT("Action: web_search") is None


def test_thought_empty_when_completion_starts_with_newline_action():
    assert THOUGHT("\nAction: web_search") == ""


def test_action_strict_requires_space_after_marker():
    assert ACTION_STRICT("x\nAction:web_search") is None
    assert ACTION_STRICT("x\nAction: web_search\nAction Input: q") == "web_search"


def test_action_loose_accepts_missing_space():
    assert ACTION_LOOSE("x\nAction:web_search\n") == "web_search"


def test_action_rules_do_not_match_action_input():
    assert ACTION_LOOSE("Action Input: foo") is None


def test_action_input_is_rest_of_line():
    assert ACTION_INPUT("Action: a\nAction Input: weather today\nObservation: x") == "weather today"


def test_ai_answer_is_not_trimmed():
    assert AI_ANSWER("Thought: no\nAI: hello there") == " hello there"


def test_final_answer_rest_of_line_only():
    assert FINAL_ANSWER("Final Answer: Done.\nPositivity: 9") == " Done."


def test_positivity_requires_line_start_after_first_line():
    assert POSITIVITY("Positivity: 10") is None
    assert POSITIVITY("Final Answer: x\nPositivity: 9.5") == " 9.5"


def test_rest_of_line_rules_stop_at_carriage_return():
    text = "I should search.\r\nAction: web_search\r\nAction Input: q\r\nFinal Answer: x\r\nAI: hi\r\n"
    assert THOUGHT(text) == "I should search."
    assert ACTION_STRICT(text) == "web_search"
    assert ACTION_LOOSE(text) == " web_search"
    assert ACTION_INPUT(text) == "q"
    assert FINAL_ANSWER(text) == " x"
    assert AI_ANSWER(text) == " hi"
    assert POSITIVITY("a\r\nPositivity: 9\r\n") == " 9"


def test_missing_marker_returns_none():
    assert FINAL_ANSWER("nothing here") is None
    assert AI_ANSWER("nothing here") is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        (" 9.5", 9.5),
        ("9", 9.0),
        ("10/10", 10.0),
        ("-3", -3.0),
        (".5", 0.5),
        ("1e1", 10.0),
        ("high", None),
        ("", None),
    ],
)
def test_parse_leading_float(raw, expected):
    assert parse_leading_float(raw) == expected
