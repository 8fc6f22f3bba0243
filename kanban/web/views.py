from __future__ import annotations

import json
from html import escape

from kanban.domain.entities import TaskEntity
from kanban.domain.enums import TaskStatus

HTMX_SRC = "https://unpkg.com/htmx.org@1.9.12"

COLUMN_TITLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To Do",
    TaskStatus.DOING: "Doing",
    TaskStatus.DONE: "Done",
}

_STYLE = """
body { margin: 0; font-family: "Segoe UI", system-ui, sans-serif; background: #0F172A; color: #E6EDF3; }
main { padding: 24px; }
form.add-task { display: flex; gap: 8px; margin-bottom: 24px; }
form.add-task input { padding: 8px; border-radius: 6px; border: 1px solid #202A3B; background: #111827; color: inherit; }
#board { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; }
.column { background: #111827; border-radius: 10px; padding: 12px; min-height: 200px; }
.column h2 { font-size: 15px; margin: 0 0 12px 0; }
.task { background: #1B2230; border-radius: 8px; padding: 10px; margin-bottom: 8px; }
.task p { margin: 4px 0 8px 0; font-size: 13px; color: #94A3B8; }
.task button { margin-right: 4px; background: #202A3B; color: inherit; border: 0; border-radius: 4px; padding: 4px 8px; cursor: pointer; }
.empty { font-size: 13px; color: #64748B; }
"""


def _move_button(task: TaskEntity, target: TaskStatus) -> str:
    vals = escape(json.dumps({"id": str(task.id), "status": target.value}), quote=True)
    return (
        f'<button hx-post="/move-task" hx-vals="{vals}" '
        f'hx-target="#board" hx-swap="innerHTML">{escape(COLUMN_TITLES[target])}</button>'
    )


def render_task(task: TaskEntity) -> str:
    description = ""
    if task.description:
        description = f"<p>{escape(task.description)}</p>"
    buttons = "".join(_move_button(task, status) for status in TaskStatus if status != task.status)
    return (
        f'<div class="task" id="task-{task.id}">'
        f"<strong>{escape(task.title)}</strong>{description}"
        f"<div>{buttons}</div></div>"
    )


def render_column_content(status: TaskStatus, tasks: list[TaskEntity]) -> str:
    if not tasks:
        return '<div class="empty">No tasks</div>'
    return "".join(render_task(task) for task in tasks)


def render_column_heading(status: TaskStatus, count: int, *, oob: bool = False) -> str:
    swap = ' hx-swap-oob="true"' if oob else ""
    return (
        f'<h2 id="heading-{status.value}"{swap}>'
        f"{escape(COLUMN_TITLES[status])} ({count})</h2>"
    )


def render_column_update(status: TaskStatus, tasks: list[TaskEntity]) -> str:
    """Column body plus an out-of-band heading so the task count stays current."""
    return render_column_content(status, tasks) + render_column_heading(status, len(tasks), oob=True)


def render_columns(board: dict[TaskStatus, list[TaskEntity]]) -> str:
    sections = []
    for status in TaskStatus:
        tasks = board.get(status, [])
        sections.append(
            f'<section class="column" data-status="{status.value}">'
            f"{render_column_heading(status, len(tasks))}"
            f'<div id="column-{status.value}">{render_column_content(status, tasks)}</div>'
            f"</section>"
        )
    return "".join(sections)


def render_page(board: dict[TaskStatus, list[TaskEntity]]) -> str:
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Kanban</title>
    <script src="{HTMX_SRC}"></script>
    <style>{_STYLE}</style>
  </head>
  <body>
    <main>
      <form class="add-task" hx-post="/add-task" hx-target="#column-todo" hx-swap="innerHTML"
            hx-on::after-request="if (event.detail.successful) this.reset()">
        <input name="title" placeholder="Title" required />
        <input name="description" placeholder="Description" />
        <button type="submit">Add</button>
      </form>
      <div id="board">{render_columns(board)}</div>
    </main>
  </body>
</html>
"""
