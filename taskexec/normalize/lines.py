"""Ordered first-match-wins classification of agent output lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from taskexec.core.models import (
    AssistantMessage,
    EntryType,
    SystemMessage,
    ToolUse,
    UserMessage,
)
from taskexec.normalize.actions import classify_action, is_tool_usage

ERROR_PREFIXES: tuple[str, ...] = ("Error:", "❌")
STATUS_PREFIXES: tuple[str, ...] = ("✅", "🚀", "📦")
USER_INPUT_PREFIXES: tuple[str, ...] = ("User input:", "Enter your message:")


@dataclass(frozen=True, slots=True)
class LineRule:
    name: str
    matches: Callable[[str], bool]
    classify: Callable[[str, str], EntryType]


def _starts_with(prefixes: tuple[str, ...]) -> Callable[[str], bool]:
    def predicate(line: str) -> bool:
        return line.startswith(prefixes)

    return predicate


def _always(line: str) -> bool:
    return True


def _system_message(line: str, worktree_path: str) -> EntryType:
    return SystemMessage()


def _user_message(line: str, worktree_path: str) -> EntryType:
    return UserMessage()


def _assistant_message(line: str, worktree_path: str) -> EntryType:
    return AssistantMessage()


def _tool_use(line: str, worktree_path: str) -> EntryType:
    tool_name, action_type = classify_action(line, worktree_path)
    return ToolUse(tool_name=tool_name, action_type=action_type)


LINE_RULES: tuple[LineRule, ...] = (
    LineRule("error", _starts_with(ERROR_PREFIXES), _system_message),
    LineRule("status", _starts_with(STATUS_PREFIXES), _system_message),
    LineRule("user_input", _starts_with(USER_INPUT_PREFIXES), _user_message),
    LineRule("tool_use", is_tool_usage, _tool_use),
    LineRule("assistant_fallback", _always, _assistant_message),
)


def match_line_rule(line: str) -> LineRule:
    for rule in LINE_RULES:
        if rule.matches(line):
            return rule
    # Unreachable while the fallback rule closes the table.
    raise AssertionError("line rule table has no fallback")


def classify_line(line: str, worktree_path: str) -> EntryType:
    """Classify a trimmed, non-blank line; the first matching rule wins."""
    return match_line_rule(line).classify(line, worktree_path)
