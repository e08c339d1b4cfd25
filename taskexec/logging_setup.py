"""Process-wide logging defaults for the taskexec CLI."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "TASKEXEC_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is when a record is emitted."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging(level_name: str | None = None) -> None:
    """Configure stderr logging.

    The level comes from ``level_name`` or ``TASKEXEC_LOG_LEVEL`` (default
    ``WARNING``); unknown names fall back to ``WARNING``. Existing root
    handlers are replaced by a single :class:`StderrHandler`, so callers that
    swap ``sys.stderr`` (test runners, in-process CLI use) never leave the
    root logger writing to a closed stream. stdout stays reserved for command
    output.
    """
    name = (level_name or os.getenv(LOG_LEVEL_ENV_VAR, "WARNING")).strip().upper()
    level = getattr(logging, name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        handlers=[StderrHandler()],
        level=level,
        format=LOG_FORMAT,
        force=True,
    )
