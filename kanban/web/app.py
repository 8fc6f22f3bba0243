from __future__ import annotations

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse

from kanban.domain.enums import TaskStatus
from kanban.domain.errors import InvalidStatusError, TaskTitleEmptyError
from kanban.services.task_service import TaskService

from .views import (
    render_column_content,
    render_column_update,
    render_columns,
    render_page,
)


def _service(request: Request) -> TaskService:
    return request.app.state.task_service


def _parse_status(raw: str) -> TaskStatus:
    try:
        return TaskStatus.parse(raw)
    except InvalidStatusError:
        raise HTTPException(status_code=400, detail="Invalid status") from None


def create_app(service: TaskService) -> FastAPI:
    app = FastAPI(title="Kanban", docs_url=None, redoc_url=None)
    app.state.task_service = service

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> HTMLResponse:
        return HTMLResponse(render_page(_service(request).board()))

    @app.post("/add-task", response_class=HTMLResponse)
    def add_task(
        request: Request,
        title: str = Form(""),
        description: str = Form(""),
    ) -> HTMLResponse:
        service = _service(request)
        try:
            service.create_task(title, description)
        except TaskTitleEmptyError:
            raise HTTPException(status_code=400, detail="Title is required") from None
        tasks = service.list_tasks(TaskStatus.TODO)
        return HTMLResponse(render_column_update(TaskStatus.TODO, tasks))

    @app.post("/move-task", response_class=HTMLResponse)
    def move_task(
        request: Request,
        raw_id: str = Form("", alias="id"),
        status: str = Form(""),
    ) -> HTMLResponse:
        try:
            task_id = int(raw_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid task ID") from None
        new_status = _parse_status(status)

        service = _service(request)
        if service.move_task(task_id, new_status) is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return HTMLResponse(render_columns(service.board()))

    @app.get("/column/{status}", response_class=HTMLResponse)
    def column(request: Request, status: str) -> HTMLResponse:
        column_status = _parse_status(status)
        tasks = _service(request).list_tasks(column_status)
        return HTMLResponse(render_column_content(column_status, tasks))

    return app
