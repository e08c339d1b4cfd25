import json
from pathlib import Path

import pytest

from taskexec.tasks import InMemoryTaskStore, Task, TaskStoreError, load_task_store


def test_in_memory_store_lookup() -> None:
    store = InMemoryTaskStore([Task(id="t1", title="Add login")])
    assert store.find_by_id("t1") == Task(id="t1", title="Add login")
    assert store.find_by_id("missing") is None
    assert len(store) == 1


def test_load_task_store_accepts_object_with_tasks_array(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.json"
    tasks_file.write_text(
        json.dumps(
            {
                "tasks": [
                    {"id": "t1", "title": "Add login", "description": "Use OAuth"},
                    {"id": "t2", "title": "Fix typo"},
                ]
            }
        ),
        encoding="utf-8",
    )

    store = load_task_store(tasks_file)

    assert store.find_by_id("t1") == Task(id="t1", title="Add login", description="Use OAuth")
    assert store.find_by_id("t2") == Task(id="t2", title="Fix typo")


def test_load_task_store_accepts_top_level_array(tmp_path: Path) -> None:
    tasks_file = tmp_path / "tasks.json"
    tasks_file.write_text(json.dumps([{"id": "t1", "title": "Add login"}]), encoding="utf-8")
    assert load_task_store(tasks_file).find_by_id("t1") is not None


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{broken", "Invalid task file JSON"),
        ('{"items": []}', "must be a JSON array"),
        ('[{"title": "no id"}]', "non-empty string 'id'"),
        ('[{"id": "t1"}]', "string 'title'"),
        ('[{"id": "t1", "title": "x", "description": 3}]', "non-string 'description'"),
        ('["t1"]', "JSON objects"),
    ],
)
def test_load_task_store_rejects_malformed_files(
    tmp_path: Path,
    content: str,
    message: str,
) -> None:
    tasks_file = tmp_path / "tasks.json"
    tasks_file.write_text(content, encoding="utf-8")

    with pytest.raises(TaskStoreError, match=message):
        load_task_store(tasks_file)


def test_load_task_store_missing_file_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_task_store(tmp_path / "missing.json")
