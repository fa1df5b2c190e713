"""Utility functions for Taskboard MCP."""

from taskboard_mcp.utils.auth import AuthClient, Subscription
from taskboard_mcp.utils.filters import assigned_to, filter_by_title
from taskboard_mcp.utils.formatters import (
    _format_notification,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)
from taskboard_mcp.utils.parsers import _parse_task, _parse_tasks
from taskboard_mcp.utils.store import RemoteStore, StoreResponse

__all__ = [
    "RemoteStore",
    "StoreResponse",
    "AuthClient",
    "Subscription",
    "filter_by_title",
    "assigned_to",
    "_parse_task",
    "_parse_tasks",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
    "_format_notification",
]
