import os

import pytest

from taskexec.core.models import (
    CommandRun,
    FileRead,
    FileWrite,
    Other,
    Search,
    TaskCreate,
    WebFetch,
)
from taskexec.normalize import TOOL_MARKERS, classify_action, is_tool_usage

WORKTREE = "/tmp/wt"


def test_is_tool_usage_detects_markers() -> None:
    assert is_tool_usage("Reading file: src/main.rs")
    assert is_tool_usage("Writing file: output.txt")
    assert is_tool_usage("Running command: npm install")
    assert not is_tool_usage("This is just a regular message")


@pytest.mark.parametrize(
    ("line", "tool_name", "action"),
    [
        ("Reading file: src/main.x", "file_read", FileRead(path="src/main.x")),
        ("Writing file: out.txt", "file_write", FileWrite(path="out.txt")),
        ("Running command: npm install", "command_run", CommandRun(command="npm install")),
        ("Searching for: TODO markers", "search", Search(query="TODO markers")),
        ("Creating task: add tests", "task_create", TaskCreate(description="add tests")),
        (
            "Fetching URL: https://example.com",
            "web_fetch",
            WebFetch(url="https://example.com"),
        ),
    ],
)
def test_classify_action_dispatch_table(line: str, tool_name: str, action: object) -> None:
    assert classify_action(line, WORKTREE) == (tool_name, action)


@pytest.mark.skipif(os.name == "nt", reason="POSIX path conventions")
def test_file_paths_are_relativized_to_worktree() -> None:
    assert classify_action("Reading file: /tmp/wt/src/main.x", WORKTREE) == (
        "file_read",
        FileRead(path="src/main.x"),
    )
    assert classify_action("Writing file: /var/log/out.txt", WORKTREE) == (
        "file_write",
        FileWrite(path="/var/log/out.txt"),
    )


def test_command_payload_is_not_relativized() -> None:
    _, action = classify_action("Running command: cat /tmp/wt/a.txt", WORKTREE)
    assert action == CommandRun(command="cat /tmp/wt/a.txt")


def test_earlier_marker_wins_when_several_match() -> None:
    line = "Running command: grep x -- Reading file: y"
    tool_name, action = classify_action(line, WORKTREE)
    assert tool_name == "file_read"
    # The payload still comes from the first colon in the line.
    assert action == FileRead(path="grep x -- Reading file: y")


def test_payload_uses_first_colon_in_line() -> None:
    _, action = classify_action("[12:00] Running command: ls", WORKTREE)
    assert action == CommandRun(command="00] Running command: ls")


def test_unmatched_line_falls_back_to_other() -> None:
    assert classify_action("did something", WORKTREE) == (
        "unknown",
        Other(description="did something"),
    )


def test_predicate_and_dispatch_share_markers() -> None:
    for marker in TOOL_MARKERS:
        line = f"{marker.marker} payload"
        assert is_tool_usage(line)
        tool_name, _ = classify_action(line, WORKTREE)
        assert tool_name == marker.tool_name
