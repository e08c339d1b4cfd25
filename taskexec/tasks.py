"""Task records and lookup stores consumed by executors."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Iterable, Protocol


class TaskStoreError(ValueError):
    """Raised when a task source is malformed."""


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Task":
        if not isinstance(raw, dict):
            raise TaskStoreError("Task entries must be JSON objects.")
        task_id = raw.get("id")
        title = raw.get("title")
        if not isinstance(task_id, str) or not task_id.strip():
            raise TaskStoreError("Task entry requires a non-empty string 'id'.")
        if not isinstance(title, str):
            raise TaskStoreError(f"Task '{task_id}' requires a string 'title'.")
        description = raw.get("description")
        if description is not None and not isinstance(description, str):
            raise TaskStoreError(f"Task '{task_id}' has a non-string 'description'.")
        return cls(id=task_id.strip(), title=title, description=description)


class TaskStore(Protocol):
    """Lookup contract for task records."""

    def find_by_id(self, task_id: str) -> Task | None:
        """Return the task with ``task_id`` or None when it does not exist."""


class InMemoryTaskStore:
    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[str, Task] = {}
        for task in tasks:
            self.add(task)

    def add(self, task: Task) -> None:
        self._tasks[task.id] = task

    def find_by_id(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def __len__(self) -> int:
        return len(self._tasks)


def load_task_store(path: str | Path) -> InMemoryTaskStore:
    """Load tasks from a JSON file.

    Accepts either a top-level array of task objects or an object with a
    ``tasks`` array.
    """
    source = Path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise TaskStoreError(f"Invalid task file JSON ({source}): {error}") from error

    if isinstance(raw, dict):
        raw = raw.get("tasks")
    if not isinstance(raw, list):
        raise TaskStoreError(
            f"Task file must be a JSON array or an object with a 'tasks' array ({source})."
        )
    return InMemoryTaskStore(Task.from_dict(item) for item in raw)
