from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from kanban.infra.store import TaskStore
from kanban.services.task_service import TaskService
from kanban.web.app import create_app


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(data_file: Path) -> TaskStore:
    return TaskStore(data_file)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def client(service: TaskService) -> TestClient:
    return TestClient(create_app(service))
