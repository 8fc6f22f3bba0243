from __future__ import annotations


class KanbanError(Exception):
    """Base class for errors raised by the board."""


class InvalidStatusError(KanbanError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid status: {value!r}")
        self.value = value


class TaskTitleEmptyError(KanbanError, ValueError):
    pass


class StoreLoadError(KanbanError):
    """The persisted task file exists but could not be read or decoded."""
