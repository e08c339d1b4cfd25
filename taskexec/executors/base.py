"""Executor contracts, spawn context and error types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Protocol

from taskexec.core.models import NormalizedConversation
from taskexec.executors.command import CommandProcess, Invocation
from taskexec.tasks import Task, TaskStore


class ExecutorError(Exception):
    """Base class for executor errors."""


class TaskNotFoundError(ExecutorError):
    """Raised when a spawn references a task id with no record."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


@dataclass(frozen=True, slots=True)
class SpawnContext:
    """Diagnostic details attached to a failed spawn."""

    executor_type: str
    program: str
    args: tuple[str, ...] = ()
    working_dir: str | None = None
    task_id: str | None = None
    task_title: str | None = None
    context: str | None = None

    @classmethod
    def from_invocation(cls, invocation: Invocation, executor_type: str) -> "SpawnContext":
        return cls(
            executor_type=executor_type,
            program=invocation.program,
            args=invocation.args,
            working_dir=invocation.working_dir,
        )

    def with_task(self, task_id: str, task_title: str | None = None) -> "SpawnContext":
        return replace(self, task_id=task_id, task_title=task_title)

    def with_context(self, context: str) -> "SpawnContext":
        return replace(self, context=context)

    def spawn_error(self, error: BaseException) -> "SpawnError":
        return SpawnError(self, error)

    def describe(self) -> str:
        parts = [f"executor={self.executor_type}", f"program={self.program}"]
        if self.task_id is not None:
            parts.append(f"task_id={self.task_id}")
        if self.task_title is not None:
            parts.append(f"task_title={self.task_title!r}")
        if self.working_dir is not None:
            parts.append(f"working_dir={self.working_dir}")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "executor_type": self.executor_type,
            "program": self.program,
            "args": list(self.args),
            "working_dir": self.working_dir,
            "task_id": self.task_id,
            "task_title": self.task_title,
            "context": self.context,
        }


class SpawnError(ExecutorError):
    """The launcher could not start the agent process."""

    def __init__(self, context: SpawnContext, error: BaseException) -> None:
        phase = context.context or f"{context.executor_type} execution"
        super().__init__(f"{phase} failed to start ({context.describe()}): {error}")
        self.spawn_context = context
        self.error = error


class Executor(Protocol):
    """Contract for coding-agent executors."""

    executor_type: str

    def build_spawn_invocation(self, task: Task, worktree_path: str) -> Invocation:
        """Return the command line that starts work on ``task``."""

    def build_followup_invocation(self, prompt: str, worktree_path: str) -> Invocation:
        """Return the command line for a follow-up turn carrying ``prompt``."""

    async def spawn(
        self,
        tasks: TaskStore,
        task_id: str,
        worktree_path: str,
    ) -> CommandProcess:
        """Start the agent on a new task inside ``worktree_path``."""

    async def spawn_followup(
        self,
        tasks: TaskStore,
        task_id: str,
        session_id: str | None,
        prompt: str,
        worktree_path: str,
    ) -> CommandProcess:
        """Start a follow-up turn for an existing task."""

    def normalize_logs(self, logs: str, worktree_path: str) -> NormalizedConversation:
        """Convert captured agent output into a conversation record."""
