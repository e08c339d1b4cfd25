"""Executor registry and built-in executors."""

from taskexec.executors.aaa import AaaExecutor, build_problem_statement
from taskexec.executors.base import (
    Executor,
    ExecutorError,
    SpawnContext,
    SpawnError,
    TaskNotFoundError,
)
from taskexec.executors.command import (
    AsyncioProcessLauncher,
    CommandProcess,
    Invocation,
    ProcessLauncher,
)
from taskexec.executors.registry import (
    ExecutorRegistryError,
    get_executor,
    initialize_default_executors,
    list_executor_keys,
    load_executors_from_plugins,
    register_executor,
    register_executor_class,
    register_executor_entrypoint,
    reset_executor_registry,
)

initialize_default_executors()

__all__ = [
    "AaaExecutor",
    "AsyncioProcessLauncher",
    "CommandProcess",
    "Executor",
    "ExecutorError",
    "ExecutorRegistryError",
    "Invocation",
    "ProcessLauncher",
    "SpawnContext",
    "SpawnError",
    "TaskNotFoundError",
    "build_problem_statement",
    "get_executor",
    "initialize_default_executors",
    "list_executor_keys",
    "load_executors_from_plugins",
    "register_executor",
    "register_executor_class",
    "register_executor_entrypoint",
    "reset_executor_registry",
]
