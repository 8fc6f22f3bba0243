from __future__ import annotations

import logging

import uvicorn

from kanban.config import DATA_FILE_ENV, SETTINGS, Settings
from kanban.domain.errors import StoreLoadError
from kanban.infra.logging import setup_logging
from kanban.infra.store import TaskStore
from kanban.services.task_service import TaskService
from kanban.web.app import create_app

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> TaskStore:
    store = TaskStore(settings.data_file)
    try:
        store.load()
    except StoreLoadError as exc:
        logger.warning("Could not load data: %s", exc)
    return store


def main() -> None:
    setup_logging(SETTINGS)
    store = build_store(SETTINGS)
    app = create_app(TaskService(store))

    logger.info("Starting server on http://%s:%s", SETTINGS.host, SETTINGS.port)
    logger.info("Your tasks are saved to: %s", store.file_path.resolve())
    if SETTINGS.data_file_from_env:
        logger.info("Using custom data location from %s environment variable", DATA_FILE_ENV)

    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_config=None)


if __name__ == "__main__":
    main()
