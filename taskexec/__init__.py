"""Run plain-text coding agents in a worktree and normalize what they print."""

from taskexec.core.models import NormalizedConversation, NormalizedEntry
from taskexec.executors import AaaExecutor, ExecutorError, SpawnError, TaskNotFoundError
from taskexec.normalize import normalize_logs

__version__ = "0.1.0"

__all__ = [
    "AaaExecutor",
    "ExecutorError",
    "NormalizedConversation",
    "NormalizedEntry",
    "SpawnError",
    "TaskNotFoundError",
    "__version__",
    "normalize_logs",
]
