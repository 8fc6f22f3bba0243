from __future__ import annotations

from enum import StrEnum

from .errors import InvalidStatusError


class TaskStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    DONE = "done"

    @classmethod
    def parse(cls, raw: object) -> TaskStatus:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidStatusError(raw) from None
