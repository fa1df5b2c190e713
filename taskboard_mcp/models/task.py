"""Core record models for Taskboard MCP."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskboard_mcp.enums import Priority, TaskStatus


class CommentModel(BaseModel):
    """A comment left on a task. Immutable once stored."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    task_id: str | None = None
    user_id: str | None = None
    content: str = ""
    created_at: datetime | None = None


class TaskModel(BaseModel):
    """Model representing a task row with its optional comment thread."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    title: str = ""
    description: str | None = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    assigned_user: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    # Populated only when fetched with the embedded comments relation
    comments: list[CommentModel] = Field(default_factory=list)


class ProfileModel(BaseModel):
    """Public profile of a user, one per authenticated identity."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        """
        Human name for the profile.

        Falls back to the email address, then to the id, when no name is set.
        """
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or self.id
