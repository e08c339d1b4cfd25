"""Type definitions for normalized conversation models."""

from typing import Literal

EntryKind = Literal[
    "system_message",
    "user_message",
    "assistant_message",
    "tool_use",
]

ENTRY_KINDS: tuple[str, ...] = (
    "system_message",
    "user_message",
    "assistant_message",
    "tool_use",
)

ActionKind = Literal[
    "file_read",
    "file_write",
    "command_run",
    "search",
    "task_create",
    "web_fetch",
    "other",
]

ACTION_KINDS: tuple[str, ...] = (
    "file_read",
    "file_write",
    "command_run",
    "search",
    "task_create",
    "web_fetch",
    "other",
)
