from __future__ import annotations

from dataclasses import dataclass

from .enums import TaskStatus


@dataclass(frozen=True)
class TaskEntity:
    id: int
    title: str
    description: str
    status: TaskStatus
