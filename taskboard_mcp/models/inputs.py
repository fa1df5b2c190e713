"""Input models for Taskboard MCP tools."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard_mcp.enums import Priority, ResponseFormat, TaskStatus

# ============================================================================
# Session Tool Input Models
# ============================================================================


class SignInInput(BaseModel):
    """Input model for signing in with email and password."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., description="Account email address", min_length=3, max_length=320)
    password: str = Field(..., description="Account password", min_length=1)


class SignOutInput(BaseModel):
    """Input model for signing out."""

    model_config = ConfigDict(str_strip_whitespace=True)
    # No parameters needed - sign out ends the current session


class WhoAmIInput(BaseModel):
    """Input model for reporting the current session."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


# ============================================================================
# Task Tool Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for listing tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    search: str | None = Field(
        default=None,
        description="Case-insensitive substring to match against task titles",
    )
    mine: bool = Field(default=False, description="Only tasks assigned to the signed-in user")
    refresh: bool = Field(
        default=True,
        description="Re-fetch from the backend first; false reuses the last fetched list",
    )
    limit: int | None = Field(default=50, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class GetTaskInput(BaseModel):
    """Input model for getting a single task with its comments."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task id to retrieve", min_length=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class AddTaskInput(BaseModel):
    """Input model for creating a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1, max_length=200)
    description: str = Field(default="", description="Longer task description", max_length=5000)
    status: TaskStatus | None = Field(
        default=None, description="Status: pending, in-progress or completed (default pending)"
    )
    priority: Priority | None = Field(default=None, description="Priority: low, medium or high (default medium)")
    due_date: datetime | None = Field(
        default=None, description="Due date as ISO 8601 (default one week from now)"
    )
    assigned_user: str | None = Field(default=None, description="User id of the assignee")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    def to_fields(self) -> dict[str, Any]:
        """Fields to send on insert; unset optionals are left to the facade defaults."""
        fields: dict[str, Any] = {"title": self.title, "description": self.description}
        if self.status is not None:
            fields["status"] = self.status
        if self.priority is not None:
            fields["priority"] = self.priority
        if self.due_date is not None:
            fields["due_date"] = self.due_date
        if self.assigned_user:
            fields["assigned_user"] = self.assigned_user
        return fields


class ModifyTaskInput(BaseModel):
    """Input model for modifying a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task id to modify", min_length=1)
    title: str | None = Field(default=None, description="New title", max_length=200)
    description: str | None = Field(default=None, description="New description", max_length=5000)
    status: TaskStatus | None = Field(default=None, description="New status")
    priority: Priority | None = Field(default=None, description="New priority")
    due_date: datetime | None = Field(default=None, description="New due date as ISO 8601")
    assigned_user: str | None = Field(
        default=None, description="New assignee user id (use empty string to unassign)"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v

    def to_patch(self) -> dict[str, Any]:
        """Only the fields the caller supplied; an empty assignee clears it."""
        patch: dict[str, Any] = {}
        for name in ("title", "description", "status", "priority", "due_date"):
            value = getattr(self, name)
            if value is not None:
                patch[name] = value
        if self.assigned_user is not None:
            patch["assigned_user"] = self.assigned_user or None
        return patch


class DeleteTaskInput(BaseModel):
    """Input model for deleting a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task id to delete", min_length=1)


class AddCommentInput(BaseModel):
    """Input model for commenting on a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task id to comment on", min_length=1)
    content: str = Field(..., description="Comment text", min_length=1, max_length=2000)


class ListProfilesInput(BaseModel):
    """Input model for listing user profiles (assignee candidates)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )
