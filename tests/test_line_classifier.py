import pytest

from taskexec.core.models import (
    AssistantMessage,
    CommandRun,
    SystemMessage,
    ToolUse,
    UserMessage,
)
from taskexec.normalize import LINE_RULES, classify_line, match_line_rule

WORKTREE = "/tmp/wt"


@pytest.mark.parametrize(
    "line",
    [
        "Error: something broke",
        "❌ build failed",
        "✅ done",
        "🚀 starting agent",
        "📦 installing packages",
    ],
)
def test_status_and_error_lines_are_system_messages(line: str) -> None:
    assert classify_line(line, WORKTREE) == SystemMessage()


@pytest.mark.parametrize("line", ["User input: fix it", "Enter your message: hi"])
def test_prompt_lines_are_user_messages(line: str) -> None:
    assert classify_line(line, WORKTREE) == UserMessage()


def test_tool_marker_line_is_tool_use() -> None:
    assert classify_line("Running command: npm install", WORKTREE) == ToolUse(
        tool_name="command_run",
        action_type=CommandRun(command="npm install"),
    )


def test_regular_text_falls_back_to_assistant_message() -> None:
    assert classify_line("This is just a regular message", WORKTREE) == AssistantMessage()


def test_error_prefix_beats_tool_marker() -> None:
    assert classify_line("Error: Running command: npm install", WORKTREE) == SystemMessage()
    assert classify_line("❌ Reading file: a.txt", WORKTREE) == SystemMessage()


def test_user_prefix_beats_tool_marker() -> None:
    assert classify_line("User input: Reading file: a.txt", WORKTREE) == UserMessage()


def test_prefixes_only_match_at_line_start() -> None:
    assert classify_line("got Error: later in line", WORKTREE) == AssistantMessage()
    assert classify_line("finished ✅", WORKTREE) == AssistantMessage()


def test_rule_order_is_fixed_and_ends_with_named_fallback() -> None:
    assert [rule.name for rule in LINE_RULES] == [
        "error",
        "status",
        "user_input",
        "tool_use",
        "assistant_fallback",
    ]
    assert match_line_rule("anything at all").name == "assistant_fallback"


@pytest.mark.parametrize(
    "line",
    ["x", "::::", "Error", "Reading file", "​", "🚀", "User input"],
)
def test_classification_is_total(line: str) -> None:
    assert classify_line(line, WORKTREE).kind in {
        "system_message",
        "user_message",
        "assistant_message",
        "tool_use",
    }
