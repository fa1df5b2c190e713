"""Explicit construction and teardown of the client object graph."""

from __future__ import annotations

import logging

from taskboard_mcp.config import Settings
from taskboard_mcp.notifications import NotificationChannel
from taskboard_mcp.repository import TaskRepository
from taskboard_mcp.session import SessionManager
from taskboard_mcp.utils.auth import AuthClient
from taskboard_mcp.utils.store import RemoteStore

logger = logging.getLogger(__name__)


class TaskboardApp:
    """
    Everything one running client needs, wired together.

    The session manager is created here and handed by reference to the
    repository; nothing is module-global. Call ``start()`` before use and
    ``close()`` once done.
    """

    def __init__(
        self,
        settings: Settings,
        auth: AuthClient | None = None,
        store: RemoteStore | None = None,
    ) -> None:
        self.settings = settings
        self.notifier = NotificationChannel()
        self.auth = auth or AuthClient(settings)
        self.store = store or RemoteStore(settings, token_provider=lambda: self.auth.access_token)
        self.session = SessionManager(self.auth, self.store, self.notifier)
        self.repository = TaskRepository(
            self.store,
            self.session,
            self.notifier,
            default_due_days=settings.default_due_days,
        )

    async def start(self) -> None:
        """Resolve the initial session, sign in from settings if needed, then load tasks."""
        await self.session.initialize()

        if self.session.user is None and self.settings.email and self.settings.password:
            await self.session.sign_in(self.settings.email, self.settings.password)

        if self.session.user is not None:
            await self.repository.list_tasks()
        logger.info("Taskboard client started (signed in: %s)", self.session.user is not None)

    async def close(self) -> None:
        await self.session.close()
        await self.store.aclose()
        await self.auth.aclose()
