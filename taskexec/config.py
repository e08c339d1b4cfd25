"""Executor configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any, Mapping

COMMAND_ENV_VAR = "TASKEXEC_AAA_COMMAND"
EXECUTOR_TYPE_ENV_VAR = "TASKEXEC_AAA_EXECUTOR_TYPE"

DEFAULT_EXECUTOR_TYPE = "AAA"
DEFAULT_COMMAND = "aaa"


def _default_env() -> dict[str, str]:
    # The AAA CLI is a node program; silence its runtime warnings on stdout.
    return {"NODE_NO_WARNINGS": "1"}


class ConfigError(ValueError):
    """Invalid executor configuration."""


@dataclass(slots=True)
class ExecutorConfig:
    """Configuration for a plain-text agent executor."""

    executor_type: str = DEFAULT_EXECUTOR_TYPE
    command: str = DEFAULT_COMMAND
    env: dict[str, str] = field(default_factory=_default_env)

    def __post_init__(self) -> None:
        if not isinstance(self.executor_type, str) or not self.executor_type.strip():
            raise ConfigError("executor_type must be a non-empty string")
        if not isinstance(self.command, str) or not self.command.strip():
            raise ConfigError("command must be a non-empty string")
        if not isinstance(self.env, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in self.env.items()
        ):
            raise ConfigError("env must map strings to strings")
        self.executor_type = self.executor_type.strip()
        self.command = self.command.strip()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExecutorConfig":
        source = os.environ if environ is None else environ
        return cls(
            executor_type=source.get(EXECUTOR_TYPE_ENV_VAR, DEFAULT_EXECUTOR_TYPE),
            command=source.get(COMMAND_ENV_VAR, DEFAULT_COMMAND),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "executor_type": self.executor_type,
            "command": self.command,
            "env": dict(self.env),
        }


def executor_config_from_mapping(raw: Mapping[str, Any]) -> ExecutorConfig:
    unknown = sorted(set(raw) - {"executor_type", "command", "env"})
    if unknown:
        raise ConfigError(f"Unknown executor config key(s): {', '.join(unknown)}")

    env = _default_env()
    raw_env = raw.get("env", {})
    if not isinstance(raw_env, dict):
        raise ConfigError("env must be a JSON object")
    env.update(raw_env)

    return ExecutorConfig(
        executor_type=raw.get("executor_type", DEFAULT_EXECUTOR_TYPE),
        command=raw.get("command", DEFAULT_COMMAND),
        env=env,
    )


def load_executor_config_from_file(path: str | Path) -> ExecutorConfig:
    """Load executor config from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise ConfigError(f"Invalid executor config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise ConfigError(f"Executor config must be a JSON object ({config_path}).")

    return executor_config_from_mapping(raw)
