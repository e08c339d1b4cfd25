"""Plain-text agent log normalization."""

from __future__ import annotations

import logging

from taskexec.core.models import NormalizedConversation, NormalizedEntry
from taskexec.normalize.lines import classify_line

LOGGER = logging.getLogger(__name__)


def normalize_logs(
    logs: str,
    worktree_path: str,
    *,
    executor_type: str,
) -> NormalizedConversation:
    """Turn a captured log blob into a conversation, one entry per non-blank line.

    Plain-text agents carry no in-band session marker, so ``session_id`` is
    always unset.
    """
    entries: list[NormalizedEntry] = []
    # Split on "\n" only; str.splitlines() would also break on form feeds
    # and Unicode separators inside a line.
    for line in logs.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue
        entries.append(
            NormalizedEntry(
                entry_type=classify_line(trimmed, worktree_path),
                content=trimmed,
            )
        )

    LOGGER.debug("normalized %d entries for executor %s", len(entries), executor_type)
    return NormalizedConversation(
        executor_type=executor_type,
        entries=tuple(entries),
        session_id=None,
    )
