"""Core models and deterministic primitives for taskexec."""

from taskexec.core.canonical import canonical_json, canonicalize
from taskexec.core.models import (
    ActionType,
    AssistantMessage,
    CommandRun,
    EntryType,
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
)
from taskexec.core.types import ACTION_KINDS, ENTRY_KINDS, ActionKind, EntryKind

__all__ = [
    "ACTION_KINDS",
    "ENTRY_KINDS",
    "ActionKind",
    "ActionType",
    "AssistantMessage",
    "CommandRun",
    "EntryKind",
    "EntryType",
    "FileRead",
    "FileWrite",
    "NormalizedConversation",
    "NormalizedEntry",
    "Other",
    "Search",
    "SystemMessage",
    "TaskCreate",
    "ToolUse",
    "UserMessage",
    "WebFetch",
    "canonical_json",
    "canonicalize",
]
