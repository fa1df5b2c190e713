"""User-visible notification channel."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from pydantic import BaseModel

from taskboard_mcp.enums import Severity
from taskboard_mcp.errors import TaskboardError

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """
    A toast-style message: title, description and severity.

    ``failed`` marks the outcome of the operation; severity is only how
    loudly it is shown. A successful delete is destructive but not failed.
    """

    title: str
    description: str = ""
    severity: Severity = Severity.DEFAULT
    failed: bool = False

    @property
    def is_error(self) -> bool:
        return self.failed


class NotificationChannel:
    """
    Collects notifications raised by the session manager and the facade.

    Every notification is logged as it is raised and kept in a bounded
    history. A caller that wants only its own notifications wraps its
    work in ``capture()``; captures are per asyncio task, so concurrent
    tool calls never see each other's notes.
    """

    def __init__(self, maxlen: int = 100) -> None:
        self._history: deque[Notification] = deque(maxlen=maxlen)
        self._captured: ContextVar[list[Notification] | None] = ContextVar("captured_notifications", default=None)

    def notify(
        self,
        title: str,
        description: str = "",
        severity: Severity = Severity.DEFAULT,
        failed: bool = False,
    ) -> Notification:
        note = Notification(title=title, description=description, severity=severity, failed=failed)
        if note.is_error:
            logger.error("%s: %s", title, description)
        else:
            logger.info("%s: %s", title, description)
        self._history.append(note)
        captured = self._captured.get()
        if captured is not None:
            captured.append(note)
        return note

    def success(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description)

    def error(self, title: str, error: TaskboardError | str) -> Notification:
        description = error.describe() if isinstance(error, TaskboardError) else error
        return self.notify(title, description, Severity.DESTRUCTIVE, failed=True)

    @contextmanager
    def capture(self) -> Iterator[list[Notification]]:
        """Collect the notifications raised by the current task inside the block."""
        notes: list[Notification] = []
        token = self._captured.set(notes)
        try:
            yield notes
        finally:
            self._captured.reset(token)

    @property
    def history(self) -> list[Notification]:
        return list(self._history)
