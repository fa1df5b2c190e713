"""Formatting utilities for task output."""

from taskboard_mcp.enums import Priority, TaskStatus
from taskboard_mcp.models.session import UserModel
from taskboard_mcp.models.task import CommentModel, ProfileModel, TaskModel
from taskboard_mcp.notifications import Notification

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
}

PRIORITY_LABELS = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}


def _short_id(value: str | None) -> str:
    return value[:8] if value else "?"


def _user_label(user_id: str | None, names: dict[str, str] | None) -> str:
    if not user_id:
        return "Unassigned"
    if names and user_id in names:
        return names[user_id]
    return _short_id(user_id)


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format.

    Output: "#1a2b3c4d: Ship v1 (high, in-progress, due:2025-01-31)"
    """
    title = task.title[:50] if task.title else "Untitled"

    meta = [task.priority.value, task.status.value]
    if task.due_date:
        meta.append(f"due:{task.due_date.date().isoformat()}")

    return f"#{_short_id(task.id)}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | search:ship
    #1a2b3c4d: Ship v1 (high, pending)
    #5e6f7a8b: Ship v2 (medium, pending)
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{len(tasks)} task(s) | {title}"

    return "\n".join([header] + [_format_task_concise(t) for t in tasks])


def _format_comment_markdown(comment: CommentModel, names: dict[str, str] | None = None) -> str:
    when = comment.created_at.strftime("%Y-%m-%d %H:%M") if comment.created_at else ""
    return f"  - [{when}] {_user_label(comment.user_id, names)}: {comment.content}"


def _format_task_markdown(task: TaskModel, names: dict[str, str] | None = None) -> str:
    """Format a single task as markdown, including comments when present."""
    lines = [f"### [{_short_id(task.id)}] {task.title or 'Untitled'}"]

    details = [
        f"**Status**: {STATUS_LABELS[task.status]}",
        f"**Priority**: {PRIORITY_LABELS[task.priority]}",
    ]
    if task.due_date:
        details.append(f"**Due**: {task.due_date.strftime('%Y-%m-%d')}")
    details.append(f"**Assignee**: {_user_label(task.assigned_user, names)}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append(task.description)

    if task.comments:
        lines.append(f"**Comments ({len(task.comments)}):**")
        for comment in task.comments:
            lines.append(_format_comment_markdown(comment, names))

    return "\n".join(lines)


def _format_tasks_markdown(
    tasks: list[TaskModel],
    title: str = "Tasks",
    names: dict[str, str] | None = None,
    empty_message: str = "No tasks found.",
) -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\n{empty_message}"

    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]

    for task in tasks:
        lines.append(_format_task_markdown(task, names))
        lines.append("")

    return "\n".join(lines)


def _format_profiles_markdown(profiles: list[ProfileModel]) -> str:
    if not profiles:
        return "# Users\n\nNo profiles found."

    lines = ["# Users", f"*{len(profiles)} user(s)*", ""]
    for profile in profiles:
        email = f" <{profile.email}>" if profile.email else ""
        lines.append(f"- **{profile.display_name}**{email} `{profile.id}`")
    return "\n".join(lines)


def _format_user_markdown(user: UserModel | None) -> str:
    if user is None:
        return "Not signed in."
    return f"Signed in as **{user.email or user.id}** (`{user.id}`)"


def _format_notification(note: Notification) -> str:
    """Render a notification as a single line; errors keep the ``Error:`` prefix."""
    prefix = "Error: " if note.is_error else ""
    if note.description:
        return f"{prefix}{note.title} - {note.description}"
    return f"{prefix}{note.title}"
