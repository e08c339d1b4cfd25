import os

import pytest

from taskexec.normalize import make_path_relative

posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX path conventions")


def test_relative_path_is_returned_unchanged() -> None:
    assert make_path_relative("src/main.rs", "/tmp/test-worktree") == "src/main.rs"


def test_relative_path_with_dot_segments_is_untouched() -> None:
    assert make_path_relative("./src/../main.rs", "/tmp/wt") == "./src/../main.rs"


@posix_only
def test_absolute_path_under_worktree_becomes_relative() -> None:
    worktree = "/tmp/test-worktree"
    assert make_path_relative(f"{worktree}/src/main.rs", worktree) == "src/main.rs"


@posix_only
def test_trailing_separator_on_worktree_is_tolerated() -> None:
    assert make_path_relative("/tmp/wt/src/main.x", "/tmp/wt/") == "src/main.x"


@posix_only
def test_absolute_path_outside_worktree_is_returned_unchanged() -> None:
    assert make_path_relative("/etc/hosts", "/tmp/wt") == "/etc/hosts"


@posix_only
def test_sibling_directory_sharing_a_string_prefix_is_not_under_worktree() -> None:
    assert make_path_relative("/tmp/wt2/src/main.x", "/tmp/wt") == "/tmp/wt2/src/main.x"


@posix_only
def test_worktree_root_itself_becomes_empty() -> None:
    assert make_path_relative("/tmp/wt", "/tmp/wt") == ""


@posix_only
def test_parent_segments_are_not_resolved() -> None:
    assert make_path_relative("/tmp/wt/../secret", "/tmp/wt") == "../secret"


@posix_only
@pytest.mark.parametrize(
    "path",
    ["src/main.x", "main.x", "a/b/c/d.txt"],
)
def test_relativizing_is_idempotent(path: str) -> None:
    once = make_path_relative(f"/tmp/wt/{path}", "/tmp/wt")
    assert once == path
    assert make_path_relative(once, "/tmp/wt") == path


@posix_only
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/tmp/wt/src//main.x", "src//main.x"),
        ("/tmp/wt/a/./b.txt", "a/./b.txt"),
        ("/tmp/wt/src/", "src"),
    ],
)
def test_remainder_keeps_its_text_as_written(path: str, expected: str) -> None:
    assert make_path_relative(path, "/tmp/wt") == expected
