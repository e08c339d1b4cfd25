"""Executor registry and plugin hooks."""

from __future__ import annotations

import importlib
from typing import Any, Callable

from taskexec.executors.base import Executor

ExecutorFactory = Callable[..., Executor]
_EXECUTOR_REGISTRY: dict[str, ExecutorFactory] = {}


class ExecutorRegistryError(ValueError):
    """Raised when executor registration or lookup fails."""


def register_executor(
    key: str,
    factory: ExecutorFactory,
    *,
    overwrite: bool = False,
) -> None:
    normalized_key = key.strip().lower()
    if not normalized_key:
        raise ExecutorRegistryError("Executor key cannot be empty.")
    if not overwrite and normalized_key in _EXECUTOR_REGISTRY:
        raise ExecutorRegistryError(f"Executor '{normalized_key}' is already registered.")
    _EXECUTOR_REGISTRY[normalized_key] = factory


def register_executor_class(
    key: str,
    executor_cls: type,
    *,
    overwrite: bool = False,
) -> None:
    register_executor(key, executor_cls, overwrite=overwrite)


def register_executor_entrypoint(
    key: str,
    entrypoint: str,
    *,
    overwrite: bool = False,
) -> None:
    module_name, separator, attr = entrypoint.partition(":")
    if not separator:
        raise ExecutorRegistryError(
            f"Invalid executor entrypoint '{entrypoint}'. Expected module:attribute."
        )
    module = importlib.import_module(module_name)
    target = getattr(module, attr)
    if not callable(target):
        raise ExecutorRegistryError(f"Executor entrypoint '{entrypoint}' is not callable.")
    register_executor(key, target, overwrite=overwrite)


def get_executor(key: str, **options: Any) -> Executor:
    """Build the executor registered under ``key``; ``options`` go to its factory."""
    normalized_key = key.strip().lower()
    if normalized_key not in _EXECUTOR_REGISTRY:
        raise ExecutorRegistryError(f"Executor '{normalized_key}' is not registered.")
    return _EXECUTOR_REGISTRY[normalized_key](**options)


def list_executor_keys() -> tuple[str, ...]:
    return tuple(sorted(_EXECUTOR_REGISTRY.keys()))


def reset_executor_registry() -> None:
    _EXECUTOR_REGISTRY.clear()


def initialize_default_executors(*, overwrite: bool = False) -> None:
    from taskexec.executors.aaa import AaaExecutor

    defaults: dict[str, type] = {"aaa": AaaExecutor}
    for key, executor_cls in defaults.items():
        if key in _EXECUTOR_REGISTRY and not overwrite:
            continue
        register_executor_class(key, executor_cls, overwrite=True)


def load_executors_from_plugins(
    plugins: dict[str, str] | None = None,
    *,
    overwrite: bool = False,
) -> None:
    """Register executors from a ``key -> module:attribute`` mapping."""
    if not plugins:
        return
    for key, entrypoint in plugins.items():
        register_executor_entrypoint(key, entrypoint, overwrite=overwrite)
