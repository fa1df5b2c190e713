"""Parser helpers for rows returned by the store."""

from typing import Any

from taskboard_mcp.models.task import CommentModel, ProfileModel, TaskModel


def _parse_task(row: dict[str, Any]) -> TaskModel:
    """
    Parse a task row into a TaskModel.

    Args:
        row: Dictionary from the ``tasks`` collection, optionally with
            an embedded ``comments`` list

    Returns:
        TaskModel instance with validated data
    """
    return TaskModel.model_validate(row)


def _parse_tasks(rows: list[dict[str, Any]]) -> list[TaskModel]:
    """Parse a list of task rows into TaskModel instances."""
    return [TaskModel.model_validate(r) for r in rows]


def _parse_comment(row: dict[str, Any]) -> CommentModel:
    return CommentModel.model_validate(row)


def _parse_profiles(rows: list[dict[str, Any]]) -> list[ProfileModel]:
    return [ProfileModel.model_validate(r) for r in rows]


def _first_row(data: Any) -> dict[str, Any] | None:
    """
    Pick the first row of an insert/update/select result.

    The store returns a list for plain calls and a bare object for
    single-row selects; both are accepted.
    """
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None
