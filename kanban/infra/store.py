from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any

from kanban.domain.entities import TaskEntity
from kanban.domain.enums import TaskStatus
from kanban.domain.errors import InvalidStatusError, StoreLoadError

logger = logging.getLogger(__name__)

_UMASK = os.umask(0)
os.umask(_UMASK)
DEFAULT_FILE_MODE = 0o666 & ~_UMASK


def _to_record(task: TaskEntity) -> dict[str, Any]:
    return {
        "ID": task.id,
        "Title": task.title,
        "Description": task.description,
        "Status": task.status.value,
    }


def _from_record(record: Any) -> TaskEntity:
    if not isinstance(record, dict):
        raise StoreLoadError(f"task entry must be an object, got {type(record).__name__}")
    try:
        task_id = record["ID"]
        title = record["Title"]
        description = record.get("Description", "")
        status = TaskStatus.parse(record["Status"])
    except KeyError as exc:
        raise StoreLoadError(f"task entry is missing {exc.args[0]!r}") from exc
    except InvalidStatusError as exc:
        raise StoreLoadError(str(exc)) from exc

    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise StoreLoadError(f"task id must be a positive integer, got {task_id!r}")
    if not isinstance(title, str) or not isinstance(description, str):
        raise StoreLoadError(f"task {task_id} has a non-string title or description")
    return TaskEntity(id=task_id, title=title, description=description, status=status)


class TaskStore:
    """
    In-memory task table persisted to a single JSON file.

    Every public method holds ``self._lock`` for its whole duration, including
    the file write that follows a mutation. Writes go to a temporary file in
    the same directory which then replaces the target.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[int, TaskEntity] = {}
        self._next_id = 1
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    # ---- mutations ----

    def add_task(self, title: str, description: str) -> TaskEntity:
        with self._lock:
            task = TaskEntity(
                id=self._next_id,
                title=title,
                description=description,
                status=TaskStatus.TODO,
            )
            self._tasks[task.id] = task
            self._next_id += 1
            self._save_locked()
            logger.debug("Task added id=%s", task.id)
            return task

    def move_task(self, task_id: int, new_status: TaskStatus | str) -> TaskEntity | None:
        status = TaskStatus.parse(new_status)
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            task = replace(task, status=status)
            self._tasks[task_id] = task
            self._save_locked()
            return task

    # ---- queries ----

    def get_task(self, task_id: int) -> TaskEntity | None:
        with self._lock:
            return self._tasks.get(task_id)

    def list_by_status(self, status: TaskStatus | str) -> list[TaskEntity]:
        status = TaskStatus.parse(status)
        with self._lock:
            tasks = [task for task in self._tasks.values() if task.status == status]
        return sorted(tasks, key=lambda task: task.id)

    def all_tasks(self) -> list[TaskEntity]:
        with self._lock:
            tasks = list(self._tasks.values())
        return sorted(tasks, key=lambda task: task.id)

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- persistence ----

    def _save_locked(self) -> None:
        """Write the full state to disk. Caller must hold ``self._lock``."""
        data = {
            "tasks": [_to_record(task) for task in self._tasks.values()],
            "next_id": self._next_id,
        }
        directory = self._file_path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._file_path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self._file_path)
            tmp_name = None
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save tasks to %s", self._file_path)
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)

    def _target_mode(self) -> int:
        try:
            return stat.S_IMODE(self._file_path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def load(self) -> None:
        """
        Replace the in-memory state with the contents of the data file.

        A missing file is not an error: the store keeps its current (empty)
        state. Any other read failure, invalid JSON, or an unexpected document
        shape raises StoreLoadError and leaves the store untouched.
        """
        with self._lock:
            try:
                raw = self._file_path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.info("No existing data file found at %s, starting fresh", self._file_path)
                return
            except OSError as exc:
                raise StoreLoadError(f"could not read {self._file_path}: {exc}") from exc
            except UnicodeDecodeError as exc:
                raise StoreLoadError(f"{self._file_path} is not valid UTF-8: {exc}") from exc

            try:
                data = json.loads(raw)
            except (ValueError, RecursionError) as exc:
                raise StoreLoadError(f"could not decode {self._file_path}: {exc}") from exc

            tasks, next_id = self._parse_document(data)
            self._tasks = tasks
            self._next_id = next_id
            logger.info("Loaded %d tasks from %s", len(tasks), self._file_path)

    @staticmethod
    def _parse_document(data: Any) -> tuple[dict[int, TaskEntity], int]:
        if not isinstance(data, dict):
            raise StoreLoadError("data file must contain a JSON object")

        records = data.get("tasks")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise StoreLoadError("'tasks' must be a list")

        tasks: dict[int, TaskEntity] = {}
        for record in records:
            task = _from_record(record)
            if task.id in tasks:
                raise StoreLoadError(f"duplicate task id {task.id}")
            tasks[task.id] = task

        saved_next_id = data.get("next_id", 1)
        if isinstance(saved_next_id, bool) or not isinstance(saved_next_id, int):
            raise StoreLoadError(f"'next_id' must be an integer, got {saved_next_id!r}")
        next_id = max(saved_next_id, max(tasks, default=0) + 1, 1)
        return tasks, next_id
