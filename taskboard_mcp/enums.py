"""Enums for Taskboard MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Task workflow status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    """Severity of a user-visible notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class AuthEvent(str, Enum):
    """Session change events emitted by the auth client."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class GuardState(str, Enum):
    """Outcome of the route guard for authenticated views."""

    LOADING = "loading"
    REDIRECT = "redirect"
    ALLOW = "allow"
