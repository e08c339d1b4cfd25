"""Worktree-relative path rendering for tool payloads."""

from __future__ import annotations

import os
from pathlib import Path
import re

_SEPARATORS = re.escape(os.sep + (os.altsep or ""))
_SEGMENT = re.compile(rf"[^{_SEPARATORS}]+")


def make_path_relative(path: str, worktree_path: str) -> str:
    """Render ``path`` relative to ``worktree_path`` when it lives under it.

    Relative paths, and absolute paths outside the worktree, come back as
    given. Matching is component-wise on the host path flavour: ``/tmp/wt2/a``
    is not under ``/tmp/wt``. The remainder is sliced out of ``path`` as
    written, so repeated separators and ``.``/``..`` segments inside it are
    kept; symlinks are not resolved.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        return path

    try:
        relative = candidate.relative_to(Path(worktree_path))
    except ValueError:
        return path

    # relative_to() yields "." for the root itself.
    if relative == Path("."):
        return ""
    return _remainder_as_written(path, len(relative.parts))


def _remainder_as_written(path: str, count: int) -> str:
    # pathlib drops "." segments, so they do not count towards the tail.
    segments = [match for match in _SEGMENT.finditer(path) if match.group() != "."]
    tail = segments[-count:]
    return path[tail[0].start() : tail[-1].end()]
