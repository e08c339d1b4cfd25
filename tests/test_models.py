from dataclasses import FrozenInstanceError
from typing import get_args

import pytest

from taskexec.core.models import (
    AssistantMessage,
    CommandRun,
    FileRead,
    FileWrite,
    NormalizedConversation,
    NormalizedEntry,
    Other,
    Search,
    SystemMessage,
    TaskCreate,
    ToolUse,
    UserMessage,
    WebFetch,
    action_from_dict,
    action_to_dict,
    entry_type_from_dict,
    entry_type_to_dict,
)
from taskexec.core.types import ACTION_KINDS, ENTRY_KINDS, ActionKind, EntryKind


def test_kind_tags_match_declared_literals() -> None:
    action_classes = (FileRead, FileWrite, CommandRun, Search, TaskCreate, WebFetch, Other)
    entry_classes = (SystemMessage, UserMessage, AssistantMessage, ToolUse)

    assert tuple(cls.kind for cls in action_classes) == ACTION_KINDS == get_args(ActionKind)
    assert tuple(cls.kind for cls in entry_classes) == ENTRY_KINDS == get_args(EntryKind)


def test_action_dict_shape() -> None:
    assert action_to_dict(WebFetch(url="https://example.com")) == {
        "action": "web_fetch",
        "url": "https://example.com",
    }
    assert action_from_dict({"action": "other", "description": "x"}) == Other(description="x")


def test_unknown_action_tag_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported action type"):
        action_from_dict({"action": "teleport", "where": "mars"})


def test_tool_use_entry_type_dict_shape() -> None:
    entry_type = ToolUse(tool_name="file_write", action_type=FileWrite(path="a.txt"))
    payload = entry_type_to_dict(entry_type)
    assert payload == {
        "type": "tool_use",
        "tool_name": "file_write",
        "action_type": {"action": "file_write", "path": "a.txt"},
    }
    assert entry_type_from_dict(payload) == entry_type


def test_unknown_entry_type_tag_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported entry type"):
        entry_type_from_dict({"type": "narration"})


def test_conversation_from_dict_restores_entries() -> None:
    conversation = NormalizedConversation(
        executor_type="AAA",
        entries=(
            NormalizedEntry(entry_type=AssistantMessage(), content="hello"),
            NormalizedEntry(
                entry_type=ToolUse(tool_name="file_write", action_type=FileWrite(path="a.txt")),
                content="Writing file: a.txt",
            ),
        ),
    )
    restored = NormalizedConversation.from_dict(conversation.to_dict())
    assert restored == conversation
    assert restored.to_dict()["session_id"] is None


def test_models_are_immutable() -> None:
    entry = NormalizedEntry(entry_type=AssistantMessage(), content="hello")
    with pytest.raises(FrozenInstanceError):
        entry.content = "changed"  # type: ignore[misc]
