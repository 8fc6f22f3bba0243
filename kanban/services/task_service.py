from __future__ import annotations

import logging

from kanban.domain.entities import TaskEntity
from kanban.domain.enums import TaskStatus
from kanban.domain.errors import TaskTitleEmptyError
from kanban.infra.store import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, store: TaskStore) -> None:
        self._store = store

    @property
    def store(self) -> TaskStore:
        return self._store

    def create_task(self, title: str, description: str = "") -> TaskEntity:
        title = (title or "").strip()
        if not title:
            raise TaskTitleEmptyError("Title is required")
        task = self._store.add_task(title, (description or "").strip())
        logger.info("Created task %s (%s)", task.id, task.title)
        return task

    def get_task(self, task_id: int) -> TaskEntity | None:
        return self._store.get_task(task_id)

    def list_tasks(self, status: TaskStatus | str) -> list[TaskEntity]:
        return self._store.list_by_status(TaskStatus.parse(status))

    def move_task(self, task_id: int, status: TaskStatus | str) -> TaskEntity | None:
        task = self._store.move_task(task_id, TaskStatus.parse(status))
        if task is None:
            logger.info("Move of unknown task %s ignored", task_id)
            return None
        logger.info("Moved task %s (%s) to %s", task.id, task.title, task.status)
        return task

    def board(self) -> dict[TaskStatus, list[TaskEntity]]:
        return {status: self._store.list_by_status(status) for status in TaskStatus}
