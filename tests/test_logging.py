from __future__ import annotations

import logging
from collections.abc import Iterator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from kanban.config import Settings
from kanban.infra.logging import setup_logging


@pytest.fixture()
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_setup_logging_writes_rotating_file(root_logger: logging.Logger, tmp_path: Path) -> None:
    settings = Settings(data_file=tmp_path / "tasks.json", log_dir=str(tmp_path / "logs"), log_level="DEBUG")

    setup_logging(settings)
    setup_logging(settings)
    logging.getLogger("kanban.test").info("board ready")
    for handler in root_logger.handlers:
        handler.flush()

    assert len(root_logger.handlers) == 2
    assert sum(isinstance(h, RotatingFileHandler) for h in root_logger.handlers) == 1
    assert root_logger.level == logging.DEBUG
    assert "INFO kanban.test board ready" in (tmp_path / "logs" / "kanban.log").read_text(encoding="utf-8")


def test_setup_logging_quiets_access_log(root_logger: logging.Logger, tmp_path: Path) -> None:
    settings = Settings(data_file=tmp_path / "tasks.json", log_dir=str(tmp_path / "logs"))

    setup_logging(settings)

    assert root_logger.level == logging.INFO
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
