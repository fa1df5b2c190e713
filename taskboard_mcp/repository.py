"""Task repository facade: UI intents to store calls, results to local state."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from taskboard_mcp.enums import Priority, Severity, TaskStatus
from taskboard_mcp.models.task import ProfileModel, TaskModel
from taskboard_mcp.notifications import Notification, NotificationChannel
from taskboard_mcp.session import SessionManager
from taskboard_mcp.utils.filters import assigned_to, filter_by_title
from taskboard_mcp.utils.parsers import _first_row, _parse_comment, _parse_profiles, _parse_task, _parse_tasks
from taskboard_mcp.utils.store import RemoteStore

TASKS = "tasks"
COMMENTS = "comments"
PROFILES = "profiles"

# Columns a caller may set on create/update
TASK_FIELDS = frozenset({"title", "description", "status", "priority", "due_date", "assigned_user"})

SIGN_IN_REQUIRED = "You must be signed in to do that."


class TaskRepository:
    """
    Facade over the ``tasks``, ``comments`` and ``profiles`` collections.

    Keeps a transient copy of the task list (newest first) and the
    currently selected task. Mutations patch the local copy after the
    store accepts them rather than re-fetching, so a record edited by
    another client can drift until the next ``list_tasks``.

    Every operation is one round trip (add_comment is two), returns the
    notification it raised, and leaves local state untouched on failure.
    """

    def __init__(
        self,
        store: RemoteStore,
        session: SessionManager,
        notifier: NotificationChannel,
        default_due_days: int = 7,
    ) -> None:
        self.store = store
        self.session = session
        self.notifier = notifier
        self.default_due_days = default_due_days
        self.tasks: list[TaskModel] = []
        self.selected: TaskModel | None = None
        self.profiles: list[ProfileModel] = []
        self.loaded = False

    def _sign_in_required(self, title: str) -> Notification | None:
        """Block the call client-side when nobody is signed in."""
        if self.session.user_id is None:
            return self.notifier.error(title, SIGN_IN_REQUIRED)
        return None

    def _find(self, task_id: str) -> TaskModel | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def _replace(self, task: TaskModel) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    # --- Queries ---

    async def list_tasks(self) -> Notification:
        """Fetch every task, newest first, replacing the local copy."""
        if denied := self._sign_in_required("Error fetching tasks"):
            return denied

        response = await self.store.select(TASKS, order="created_at", descending=True)
        if response.error:
            return self.notifier.error("Error fetching tasks", response.error)

        try:
            self.tasks = _parse_tasks(response.data or [])
        except ValidationError as e:
            return self.notifier.error("Error fetching tasks", f"Unexpected task data: {e.error_count()} error(s)")

        self.loaded = True
        return self.notifier.success("Tasks loaded", f"{len(self.tasks)} task(s) fetched.")

    async def get_task(self, task_id: str) -> Notification:
        """Fetch one task with its comments and make it the selection."""
        if denied := self._sign_in_required("Error fetching task"):
            return denied

        response = await self.store.select(TASKS, columns="*,comments(*)", filters={"id": task_id}, single=True)
        if response.error:
            return self.notifier.error("Error fetching task", response.error)

        row = _first_row(response.data)
        if row is None:
            return self.notifier.error("Error fetching task", f"Task '{task_id}' not found.")

        self.selected = _parse_task(row)
        return self.notifier.success("Task loaded", self.selected.title)

    async def list_profiles(self) -> Notification:
        """Fetch all profiles, used to pick and display assignees."""
        response = await self.store.select(PROFILES, columns="id,email,first_name,last_name")
        if response.error:
            return self.notifier.error("Error fetching profiles", response.error)

        self.profiles = _parse_profiles(response.data or [])
        return self.notifier.success("Profiles loaded", f"{len(self.profiles)} profile(s) fetched.")

    def filtered(self, search: str | None = None, mine: bool = False) -> list[TaskModel]:
        """The cached list narrowed by title search and the "assigned to me" partition."""
        tasks = assigned_to(self.tasks, self.session.user_id) if mine else self.tasks
        return filter_by_title(tasks, search)

    def select_task(self, task_id: str) -> TaskModel | None:
        self.selected = self._find(task_id)
        return self.selected

    def reset(self) -> None:
        """Forget everything cached for the previous user."""
        self.tasks = []
        self.selected = None
        self.profiles = []
        self.loaded = False

    # --- Mutations ---

    async def create_task(self, fields: dict[str, Any]) -> Notification:
        """
        Create a task from form fields.

        Status and priority default to pending and medium, the due date to
        ``default_due_days`` from now. The creator is the signed-in user.
        """
        if denied := self._sign_in_required("Error creating task"):
            return denied
        user_id = self.session.user_id

        title = (fields.get("title") or "").strip()
        if not title:
            return self.notifier.error("Error creating task", "Title is required.")

        row = {k: v for k, v in fields.items() if k in TASK_FIELDS}
        row["title"] = title
        row["status"] = fields.get("status") or TaskStatus.PENDING
        row["priority"] = fields.get("priority") or Priority.MEDIUM
        if not row.get("due_date"):
            row["due_date"] = datetime.now(timezone.utc) + timedelta(days=self.default_due_days)
        row["created_by"] = user_id

        response = await self.store.insert(TASKS, [row])
        if response.error:
            return self.notifier.error("Error creating task", response.error)

        created = _first_row(response.data)
        if created is None:
            return self.notifier.error("Error creating task", "The backend returned no row.")

        self.tasks = [_parse_task(created), *self.tasks]
        return self.notifier.success("Task created", "Your task has been created successfully.")

    async def update_task(self, patch: dict[str, Any], task_id: str | None = None) -> Notification:
        """
        Apply a partial patch to the selected task.

        Args:
            patch: Fields to replace; anything absent is left as is
            task_id: Select this cached task first
        """
        if denied := self._sign_in_required("Error updating task"):
            return denied

        if task_id is not None:
            self.select_task(task_id)
        selected = self.selected
        if selected is None or selected.id is None:
            return self.notifier.error("Error updating task", "No task selected.")

        patch = {k: v for k, v in patch.items() if k in TASK_FIELDS}
        if "title" in patch and not (patch["title"] or "").strip():
            return self.notifier.error("Error updating task", "Title is required.")
        if not patch:
            return self.notifier.error("Error updating task", "Nothing to update.")

        response = await self.store.update(TASKS, patch, filters={"id": selected.id})
        if response.error:
            return self.notifier.error("Error updating task", response.error)

        cached = self._find(selected.id) or selected
        merged = TaskModel.model_validate({**cached.model_dump(), **patch})
        self._replace(merged)
        self.selected = merged
        return self.notifier.success("Task updated", "Your task has been updated successfully.")

    async def delete_task(self, task_id: str) -> Notification:
        """Delete remotely, then drop the task from the local copy if it is there."""
        if denied := self._sign_in_required("Error deleting task"):
            return denied

        response = await self.store.delete(TASKS, filters={"id": task_id})
        if response.error:
            return self.notifier.error("Error deleting task", response.error)

        self.tasks = [t for t in self.tasks if t.id != task_id]
        if self.selected is not None and self.selected.id == task_id:
            self.selected = None
        return self.notifier.notify("Task deleted", "Your task has been deleted successfully.", Severity.DESTRUCTIVE)

    async def add_comment(self, task_id: str, content: str) -> Notification:
        """
        Comment on a task as the signed-in user.

        After the insert the task is re-fetched with its comments and becomes
        the selection; the cached copy gets the new comment appended.
        """
        if denied := self._sign_in_required("Error adding comment"):
            return denied
        user_id = self.session.user_id

        content = (content or "").strip()
        if not content:
            return self.notifier.error("Error adding comment", "Comment cannot be empty.")

        response = await self.store.insert(
            COMMENTS,
            [{"task_id": task_id, "user_id": user_id, "content": content}],
        )
        if response.error:
            return self.notifier.error("Error adding comment", response.error)

        refreshed = await self.store.select(TASKS, columns="*,comments(*)", filters={"id": task_id}, single=True)
        if refreshed.error:
            return self.notifier.error("Error adding comment", refreshed.error)

        row = _first_row(refreshed.data)
        if row is not None:
            self.selected = _parse_task(row)

        inserted = _first_row(response.data)
        cached = self._find(task_id)
        if cached is not None and inserted is not None:
            comments = [*cached.comments, _parse_comment(inserted)]
            self._replace(cached.model_copy(update={"comments": comments}))

        return self.notifier.success("Comment added", "Your comment has been added successfully.")
