"""Client-side filters over an already fetched task list."""

from taskboard_mcp.models.task import TaskModel


def filter_by_title(tasks: list[TaskModel], term: str | None) -> list[TaskModel]:
    """Tasks whose title contains ``term``, ignoring case. An empty term keeps everything."""
    if not term:
        return list(tasks)
    needle = term.casefold()
    return [t for t in tasks if needle in (t.title or "").casefold()]


def assigned_to(tasks: list[TaskModel], user_id: str | None) -> list[TaskModel]:
    """The "my tasks" partition: tasks whose assignee is ``user_id``."""
    if user_id is None:
        return []
    return [t for t in tasks if t.assigned_user == user_id]
