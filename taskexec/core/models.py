"""Core data models for normalized executor conversations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar

from taskexec.core.types import ActionKind, EntryKind


@dataclass(frozen=True, slots=True)
class FileRead:
    path: str
    kind: ClassVar[ActionKind] = "file_read"


@dataclass(frozen=True, slots=True)
class FileWrite:
    path: str
    kind: ClassVar[ActionKind] = "file_write"


@dataclass(frozen=True, slots=True)
class CommandRun:
    command: str
    kind: ClassVar[ActionKind] = "command_run"


@dataclass(frozen=True, slots=True)
class Search:
    query: str
    kind: ClassVar[ActionKind] = "search"


@dataclass(frozen=True, slots=True)
class TaskCreate:
    description: str
    kind: ClassVar[ActionKind] = "task_create"


@dataclass(frozen=True, slots=True)
class WebFetch:
    url: str
    kind: ClassVar[ActionKind] = "web_fetch"


@dataclass(frozen=True, slots=True)
class Other:
    description: str
    kind: ClassVar[ActionKind] = "other"


ActionType = FileRead | FileWrite | CommandRun | Search | TaskCreate | WebFetch | Other

_ACTION_CLASSES: dict[str, type] = {
    cls.kind: cls
    for cls in (FileRead, FileWrite, CommandRun, Search, TaskCreate, WebFetch, Other)
}


def action_to_dict(action: ActionType) -> dict[str, Any]:
    return {"action": action.kind, **asdict(action)}


def action_from_dict(raw: dict[str, Any]) -> ActionType:
    kind = raw.get("action")
    action_cls = _ACTION_CLASSES.get(kind)  # type: ignore[arg-type]
    if action_cls is None:
        raise ValueError(f"Unsupported action type: {kind}")
    fields_payload = {key: value for key, value in raw.items() if key != "action"}
    try:
        return action_cls(**fields_payload)
    except TypeError as error:
        raise ValueError(f"Invalid fields for action type {kind}: {error}") from error


@dataclass(frozen=True, slots=True)
class SystemMessage:
    kind: ClassVar[EntryKind] = "system_message"


@dataclass(frozen=True, slots=True)
class UserMessage:
    kind: ClassVar[EntryKind] = "user_message"


@dataclass(frozen=True, slots=True)
class AssistantMessage:
    kind: ClassVar[EntryKind] = "assistant_message"


@dataclass(frozen=True, slots=True)
class ToolUse:
    """A line reporting an agent action with an externally observable effect."""

    tool_name: str
    action_type: ActionType
    kind: ClassVar[EntryKind] = "tool_use"


EntryType = SystemMessage | UserMessage | AssistantMessage | ToolUse

_MESSAGE_CLASSES: dict[str, type] = {
    cls.kind: cls for cls in (SystemMessage, UserMessage, AssistantMessage)
}


def entry_type_to_dict(entry_type: EntryType) -> dict[str, Any]:
    if isinstance(entry_type, ToolUse):
        return {
            "type": entry_type.kind,
            "tool_name": entry_type.tool_name,
            "action_type": action_to_dict(entry_type.action_type),
        }
    return {"type": entry_type.kind}


def entry_type_from_dict(raw: dict[str, Any]) -> EntryType:
    kind = raw.get("type")
    if kind == ToolUse.kind:
        return ToolUse(
            tool_name=raw["tool_name"],
            action_type=action_from_dict(raw["action_type"]),
        )
    message_cls = _MESSAGE_CLASSES.get(kind)  # type: ignore[arg-type]
    if message_cls is None:
        raise ValueError(f"Unsupported entry type: {kind}")
    return message_cls()


@dataclass(frozen=True, slots=True)
class NormalizedEntry:
    """One classified, non-blank line of agent output."""

    entry_type: EntryType
    content: str
    timestamp: str | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "entry_type": entry_type_to_dict(self.entry_type),
            "content": self.content,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NormalizedEntry":
        metadata = raw.get("metadata")
        return cls(
            entry_type=entry_type_from_dict(raw["entry_type"]),
            content=raw["content"],
            timestamp=raw.get("timestamp"),
            metadata=dict(metadata) if isinstance(metadata, dict) else None,
        )


@dataclass(frozen=True, slots=True)
class NormalizedConversation:
    """Ordered record of one agent log, independent of the producing agent."""

    executor_type: str
    entries: tuple[NormalizedEntry, ...] = field(default_factory=tuple)
    session_id: str | None = None
    prompt: str | None = None
    summary: str | None = None

    def tool_uses(self) -> list[NormalizedEntry]:
        return [entry for entry in self.entries if isinstance(entry.entry_type, ToolUse)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "session_id": self.session_id,
            "executor_type": self.executor_type,
            "prompt": self.prompt,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "NormalizedConversation":
        return cls(
            executor_type=raw["executor_type"],
            entries=tuple(NormalizedEntry.from_dict(entry) for entry in raw.get("entries", [])),
            session_id=raw.get("session_id"),
            prompt=raw.get("prompt"),
            summary=raw.get("summary"),
        )
