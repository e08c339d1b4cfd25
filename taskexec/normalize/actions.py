"""Tool-usage detection and action payload extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from taskexec.core.models import (
    ActionType,
    CommandRun,
    FileRead,
    FileWrite,
    Other,
    Search,
    TaskCreate,
    WebFetch,
)
from taskexec.normalize.fields import extract_field
from taskexec.normalize.paths import make_path_relative

UNKNOWN_TOOL_NAME = "unknown"


@dataclass(frozen=True, slots=True)
class ToolMarker:
    """A marker substring and how to build the action it announces."""

    marker: str
    tool_name: str
    build: Callable[[str, str], ActionType]

    def matches(self, line: str) -> bool:
        return self.marker in line


def _file_read(line: str, worktree_path: str) -> ActionType:
    return FileRead(path=make_path_relative(extract_field(line), worktree_path))


def _file_write(line: str, worktree_path: str) -> ActionType:
    return FileWrite(path=make_path_relative(extract_field(line), worktree_path))


def _command_run(line: str, worktree_path: str) -> ActionType:
    return CommandRun(command=extract_field(line))


def _search(line: str, worktree_path: str) -> ActionType:
    return Search(query=extract_field(line))


def _task_create(line: str, worktree_path: str) -> ActionType:
    return TaskCreate(description=extract_field(line))


def _web_fetch(line: str, worktree_path: str) -> ActionType:
    return WebFetch(url=extract_field(line))


# Precedence order. is_tool_usage() and classify_action() both read this
# table, so a line flagged as tool usage always has a dispatch entry.
TOOL_MARKERS: tuple[ToolMarker, ...] = (
    ToolMarker("Reading file:", "file_read", _file_read),
    ToolMarker("Writing file:", "file_write", _file_write),
    ToolMarker("Running command:", "command_run", _command_run),
    ToolMarker("Searching for:", "search", _search),
    ToolMarker("Creating task:", "task_create", _task_create),
    ToolMarker("Fetching URL:", "web_fetch", _web_fetch),
)


def find_tool_marker(line: str) -> ToolMarker | None:
    for marker in TOOL_MARKERS:
        if marker.matches(line):
            return marker
    return None


def is_tool_usage(line: str) -> bool:
    return find_tool_marker(line) is not None


def classify_action(line: str, worktree_path: str) -> tuple[str, ActionType]:
    """Return ``(tool_name, action_type)`` for a tool-usage line.

    Lines without a known marker map to ``unknown`` with an ``Other`` action
    describing the whole line.
    """
    marker = find_tool_marker(line)
    if marker is None:
        return UNKNOWN_TOOL_NAME, Other(description=line)
    return marker.tool_name, marker.build(line, worktree_path)
