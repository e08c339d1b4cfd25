"""Executor for the AAA (Assistant Agent) command-line agent."""

from __future__ import annotations

import logging

from taskexec.config import ExecutorConfig
from taskexec.core.models import NormalizedConversation
from taskexec.executors.base import SpawnContext, TaskNotFoundError
from taskexec.executors.command import (
    AsyncioProcessLauncher,
    CommandProcess,
    Invocation,
    ProcessLauncher,
)
from taskexec.normalize import normalize_logs
from taskexec.tasks import Task, TaskStore

LOGGER = logging.getLogger(__name__)

PROBLEM_STATEMENT_REQUEST = (
    "Please help me implement this task in the codebase. Analyze the current code "
    "structure and make the necessary changes to fulfill the requirements."
)


def build_problem_statement(title: str, description: str | None = None) -> str:
    if description is not None:
        return f"Task: {title} - Description: {description} - {PROBLEM_STATEMENT_REQUEST}"
    return f"Task: {title} - {PROBLEM_STATEMENT_REQUEST}"


class AaaExecutor:
    """Run the AAA CLI headless in a worktree and normalize its plain-text log.

    New tasks pass a synthesized problem statement on the command line;
    follow-up turns send the prompt on stdin instead. AAA has no session
    concept, so follow-up session ids are accepted and ignored.
    """

    name = "aaa"

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        *,
        launcher: ProcessLauncher | None = None,
    ) -> None:
        self.config = config or ExecutorConfig.from_env()
        self.launcher = launcher or AsyncioProcessLauncher()

    @classmethod
    def with_command(
        cls,
        executor_type: str,
        command: str,
        *,
        launcher: ProcessLauncher | None = None,
    ) -> "AaaExecutor":
        return cls(
            ExecutorConfig(executor_type=executor_type, command=command),
            launcher=launcher,
        )

    @property
    def executor_type(self) -> str:
        return self.config.executor_type

    def build_spawn_invocation(self, task: Task, worktree_path: str) -> Invocation:
        return Invocation(
            program=self.config.command,
            args=(
                "--workspace",
                worktree_path,
                "--problem-statement",
                build_problem_statement(task.title, task.description),
                "--minimize-stdout-logs",
            ),
            working_dir=worktree_path,
            env=dict(self.config.env),
        )

    def build_followup_invocation(self, prompt: str, worktree_path: str) -> Invocation:
        return Invocation(
            program=self.config.command,
            args=("--workspace", worktree_path, "--minimize-stdout-logs"),
            working_dir=worktree_path,
            env=dict(self.config.env),
            stdin=prompt,
        )

    async def spawn(
        self,
        tasks: TaskStore,
        task_id: str,
        worktree_path: str,
    ) -> CommandProcess:
        task = tasks.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        invocation = self.build_spawn_invocation(task, worktree_path)
        LOGGER.info(
            "starting %s for task %s in %s", self.executor_type, task_id, worktree_path
        )
        try:
            return await self.launcher.start(invocation)
        except (OSError, UnicodeEncodeError) as error:
            spawn_error = (
                SpawnContext.from_invocation(invocation, self.executor_type)
                .with_task(task_id, task.title)
                .with_context(f"{self.executor_type} CLI execution for new task")
                .spawn_error(error)
            )
            LOGGER.error("%s", spawn_error)
            raise spawn_error from error

    async def spawn_followup(
        self,
        tasks: TaskStore,
        task_id: str,
        session_id: str | None,
        prompt: str,
        worktree_path: str,
    ) -> CommandProcess:
        invocation = self.build_followup_invocation(prompt, worktree_path)
        LOGGER.info(
            "starting %s follow-up for task %s in %s",
            self.executor_type,
            task_id,
            worktree_path,
        )
        try:
            return await self.launcher.start(invocation)
        except (OSError, UnicodeEncodeError) as error:
            spawn_error = (
                SpawnContext.from_invocation(invocation, self.executor_type)
                .with_task(task_id)
                .with_context(f"{self.executor_type} CLI followup execution")
                .spawn_error(error)
            )
            LOGGER.error("%s", spawn_error)
            raise spawn_error from error

    def normalize_logs(self, logs: str, worktree_path: str) -> NormalizedConversation:
        return normalize_logs(logs, worktree_path, executor_type=self.executor_type)
