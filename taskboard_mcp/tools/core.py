"""Core MCP tool definitions for Taskboard."""

import json
from typing import Any

from mcp.server.fastmcp import Context
from mcp.types import ToolAnnotations

from taskboard_mcp.app import TaskboardApp
from taskboard_mcp.enums import GuardState, ResponseFormat
from taskboard_mcp.models.inputs import (
    AddCommentInput,
    AddTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListProfilesInput,
    ListTasksInput,
    ModifyTaskInput,
    SignInInput,
    SignOutInput,
    WhoAmIInput,
)
from taskboard_mcp.notifications import Notification
from taskboard_mcp.server import mcp
from taskboard_mcp.utils.formatters import (
    _format_notification,
    _format_profiles_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _format_user_markdown,
)


def _get_app(ctx: Context) -> TaskboardApp:
    return ctx.request_context.lifespan_context


def _guard(app: TaskboardApp) -> str | None:
    """Return an error message unless the session allows authenticated views."""
    state = app.session.guard()
    if state == GuardState.LOADING:
        return "Error: Session is still loading. Try again in a moment."
    if state == GuardState.REDIRECT:
        return "Error: Not signed in.\nTip: Use taskboard_sign_in with your email and password first."
    return None


def _render(notes: list[Notification], body: str | None = None) -> str:
    """Notifications raised during this call, followed by the body."""
    parts = [_format_notification(n) for n in notes]
    if body:
        parts.append(body)
    return "\n\n".join(parts)


def _render_json(notes: list[Notification], payload: dict[str, Any]) -> str:
    dumped = [n.model_dump(mode="json") for n in notes]
    return json.dumps({"notifications": dumped, **payload}, indent=2, default=str)


def _names(app: TaskboardApp) -> dict[str, str]:
    return {p.id: p.display_name for p in app.repository.profiles}


# ============================================================================
# Session Tools
# ============================================================================


@mcp.tool(
    name="taskboard_sign_in",
    annotations=ToolAnnotations(
        title="Sign In",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_sign_in(params: SignInInput, ctx: Context) -> str:
    """
    Sign in to the task board with email and password.

    On success the user's profile is created if missing and the task
    list is loaded.

    Args:
        params: SignInInput containing email and password

    Returns:
        Confirmation message or error
    """
    app = _get_app(ctx)
    with app.notifier.capture() as notes:
        if await app.session.sign_in(params.email, params.password):
            app.repository.reset()
            await app.repository.list_tasks()
    return _render(notes, _format_user_markdown(app.session.user))


@mcp.tool(
    name="taskboard_sign_out",
    annotations=ToolAnnotations(
        title="Sign Out",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_sign_out(params: SignOutInput, ctx: Context) -> str:
    """
    End the current session and forget the cached task list.

    Args:
        params: SignOutInput (no parameters)

    Returns:
        Confirmation message or error
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        await app.session.sign_out()
    app.repository.reset()
    return _render(notes)


@mcp.tool(
    name="taskboard_whoami",
    annotations=ToolAnnotations(
        title="Current User",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskboard_whoami(params: WhoAmIInput, ctx: Context) -> str:
    """
    Report who is signed in.

    Args:
        params: WhoAmIInput with response_format

    Returns:
        Current user, or a note that nobody is signed in
    """
    app = _get_app(ctx)
    user = app.session.user

    if params.response_format == ResponseFormat.JSON:
        return _render_json(
            [],
            {
                "loading": app.session.loading,
                "user": user.model_dump(mode="json") if user else None,
            },
        )

    if app.session.loading:
        return "Session is still loading."
    return _format_user_markdown(user)


# ============================================================================
# Task Tools
# ============================================================================


@mcp.tool(
    name="taskboard_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_list(params: ListTasksInput, ctx: Context) -> str:
    """
    List tasks, newest first, optionally narrowed by title or assignee.

    USE THIS WHEN:
    - Finding a task id before editing, deleting or commenting
    - Looking for tasks by title ("search") or your own tasks ("mine")

    DO NOT USE WHEN:
    - You want one task with its comments → use taskboard_get instead

    If the fetch fails the previously loaded list is shown with the error.

    Args:
        params: ListTasksInput containing search, mine, refresh, limit and response_format

    Returns:
        Formatted list of tasks (markdown, concise or JSON)

    Examples:
        - All tasks: params with no fields
        - Tasks with "ship" in the title: params with search="ship"
        - Tasks assigned to me: params with mine=True
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    repo = app.repository
    with app.notifier.capture() as notes:
        if params.refresh or not repo.loaded:
            await repo.list_tasks()

    tasks = repo.filtered(params.search, params.mine)
    total_count = len(tasks)
    if params.limit and len(tasks) > params.limit:
        tasks = tasks[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return _render_json(
            notes,
            {
                "total": total_count,
                "count": len(tasks),
                "tasks": [t.model_dump(mode="json") for t in tasks],
            },
        )

    label_parts = []
    if params.mine:
        label_parts.append("mine")
    if params.search:
        label_parts.append(f"search:{params.search}")

    if params.response_format == ResponseFormat.CONCISE:
        return _render(notes, _format_tasks_concise(tasks, " ".join(label_parts) or None))

    if params.mine:
        title = "My Tasks"
        empty = "No tasks assigned to you."
    else:
        title = "All Tasks"
        empty = "No tasks available. Create your first task to get started."
    if params.search:
        title += f" matching '{params.search}'"
    return _render(notes, _format_tasks_markdown(tasks, title, _names(app), empty))


@mcp.tool(
    name="taskboard_get",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_get(params: GetTaskInput, ctx: Context) -> str:
    """
    Retrieve one task with its comment thread.

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Detailed task information (markdown, concise or JSON)

    Examples:
        - Get a task: params with task_id="1a2b3c4d-..."
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        note = await app.repository.get_task(params.task_id)
    task = app.repository.selected
    if note.is_error or task is None:
        return _render(notes)

    if params.response_format == ResponseFormat.JSON:
        return _render_json(notes, {"task": task.model_dump(mode="json")})
    if params.response_format == ResponseFormat.CONCISE:
        return _render(notes, _format_task_concise(task))
    return _render(notes, _format_task_markdown(task, _names(app)))


@mcp.tool(
    name="taskboard_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def taskboard_add(params: AddTaskInput, ctx: Context) -> str:
    """
    Create a new task.

    Status defaults to pending, priority to medium and the due date to one
    week from now. The signed-in user is recorded as the creator.

    Args:
        params: AddTaskInput containing title and optional attributes

    Returns:
        Confirmation message with the created task

    Examples:
        - Simple task: params with title="Ship v1"
        - Urgent task: params with title="Fix login", priority="high"
        - Assigned task: params with title="Review PR", assigned_user="<user id>"
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        note = await app.repository.create_task(params.to_fields())
    if note.is_error:
        return _render(notes)
    return _render(notes, _format_task_markdown(app.repository.tasks[0], _names(app)))


@mcp.tool(
    name="taskboard_modify",
    annotations=ToolAnnotations(
        title="Modify Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_modify(params: ModifyTaskInput, ctx: Context) -> str:
    """
    Update some fields of an existing task; fields left out are unchanged.

    CLEARING VALUES: Use assigned_user="" to unassign a task.

    Args:
        params: ModifyTaskInput containing task_id and the fields to change

    Returns:
        Confirmation message with the updated task

    Examples:
        - Start work: params with task_id="...", status="in-progress"
        - Reassign: params with task_id="...", assigned_user="<user id>"
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    repo = app.repository
    with app.notifier.capture() as notes:
        if not repo.loaded:
            await repo.list_tasks()
        note = await repo.update_task(params.to_patch(), task_id=params.task_id)
    if note.is_error or repo.selected is None:
        return _render(notes)
    return _render(notes, _format_task_markdown(repo.selected, _names(app)))


@mcp.tool(
    name="taskboard_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_delete(params: DeleteTaskInput, ctx: Context) -> str:
    """
    Permanently delete a task.

    Args:
        params: DeleteTaskInput containing the task_id to delete

    Returns:
        Confirmation message
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        await app.repository.delete_task(params.task_id)
    return _render(notes)


@mcp.tool(
    name="taskboard_comment",
    annotations=ToolAnnotations(
        title="Comment on Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def taskboard_comment(params: AddCommentInput, ctx: Context) -> str:
    """
    Add a comment to a task as the signed-in user.

    Args:
        params: AddCommentInput containing task_id and content

    Returns:
        The task with its refreshed comment thread
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        note = await app.repository.add_comment(params.task_id, params.content)
    task = app.repository.selected
    if note.is_error or task is None or task.id != params.task_id:
        return _render(notes)
    return _render(notes, _format_task_markdown(task, _names(app)))


@mcp.tool(
    name="taskboard_profiles",
    annotations=ToolAnnotations(
        title="List Users",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def taskboard_profiles(params: ListProfilesInput, ctx: Context) -> str:
    """
    List user profiles, e.g. to find an assignee's user id.

    Args:
        params: ListProfilesInput with response_format

    Returns:
        Users with their ids
    """
    app = _get_app(ctx)
    if error := _guard(app):
        return error

    with app.notifier.capture() as notes:
        note = await app.repository.list_profiles()
    if note.is_error:
        return _render(notes)

    profiles = app.repository.profiles
    if params.response_format == ResponseFormat.JSON:
        return _render_json(
            notes,
            {"profiles": [p.model_dump(mode="json") | {"display_name": p.display_name} for p in profiles]},
        )
    return _render(notes, _format_profiles_markdown(profiles))
