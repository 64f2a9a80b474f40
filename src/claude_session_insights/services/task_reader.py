"""Read tasks (~/.claude/tasks/<session>/*.json) and todos (~/.claude/todos/*.json)."""

import logging
from pathlib import Path

import orjson

from claude_session_insights.types.artifacts import TaskInfo, TodoItem
from claude_session_insights.utils.dates import in_date_range, mtime_to_local_date

logger = logging.getLogger(__name__)

REPORTED_TASK_STATUSES = frozenset({"completed", "in_progress"})


def _modified_in_range(path: Path, from_date: str, to_date: str) -> bool:
    try:
        mtime = path.stat().st_mtime
    except FileNotFoundError:
        return False
    return in_date_range(mtime_to_local_date(mtime), from_date, to_date)


def _load_json(path: Path):
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        logger.debug("Malformed JSON in %s: %s", path, e)
        return None


def _str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def read_tasks(tasks_dir: str | Path, from_date: str, to_date: str) -> list[TaskInfo]:
    """Completed and in-progress tasks whose file changed within the date range."""
    root = Path(tasks_dir)
    if not root.is_dir():
        return []

    tasks: list[TaskInfo] = []
    for session_dir in sorted(root.iterdir()):
        if not session_dir.is_dir():
            continue
        for task_file in sorted(session_dir.glob("*.json")):
            if not _modified_in_range(task_file, from_date, to_date):
                continue
            content = _load_json(task_file)
            if not isinstance(content, dict):
                continue
            subject = content.get("subject")
            status = content.get("status")
            if not subject or status not in REPORTED_TASK_STATUSES:
                continue
            tasks.append(TaskInfo(
                id=str(content.get("id", task_file.stem)),
                subject=str(subject),
                description=str(content.get("description") or ""),
                status=status,
                session_dir=session_dir.name,
                blocks=_str_list(content.get("blocks")),
                blocked_by=_str_list(content.get("blockedBy")),
            ))
    return tasks


def _todo_from_dict(item: dict, default_id: str) -> TodoItem | None:
    content = item.get("content")
    if not content:
        return None
    return TodoItem(
        id=str(item.get("id") or default_id),
        content=str(content),
        status=str(item.get("status") or "unknown"),
        session_dir=str(item.get("sessionDir") or ""),
    )


def read_todos(todos_dir: str | Path, from_date: str, to_date: str) -> list[TodoItem]:
    """Todo items from files changed within the date range.

    A todo file holds either a single item or a list of items.
    """
    root = Path(todos_dir)
    if not root.is_dir():
        return []

    todos: list[TodoItem] = []
    for todo_file in sorted(root.glob("*.json")):
        if not _modified_in_range(todo_file, from_date, to_date):
            continue
        content = _load_json(todo_file)
        items = content if isinstance(content, list) else [content]
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            default_id = todo_file.stem if len(items) == 1 else f"{todo_file.stem}-{index}"
            todo = _todo_from_dict(item, default_id)
            if todo is not None:
                todos.append(todo)
    return todos
