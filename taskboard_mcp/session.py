"""Session manager: the signed-in identity and its lifecycle."""

from __future__ import annotations

import logging
from typing import Any

from taskboard_mcp.enums import AuthEvent, GuardState
from taskboard_mcp.errors import AuthError
from taskboard_mcp.models.session import SessionModel, UserModel
from taskboard_mcp.notifications import NotificationChannel
from taskboard_mcp.utils.auth import AuthClient, Subscription
from taskboard_mcp.utils.store import RemoteStore

logger = logging.getLogger(__name__)

PROFILES = "profiles"


class SessionManager:
    """
    Owns the current user and a ``loading`` flag for everything else.

    Construct it, ``await initialize()`` once, and ``await close()`` on
    shutdown. ``loading`` stays True until the first session check has
    resolved, whatever its outcome. Errors from the backend are reported
    on the notification channel and never raised.
    """

    def __init__(self, auth: AuthClient, store: RemoteStore, notifier: NotificationChannel) -> None:
        self.auth = auth
        self.store = store
        self.notifier = notifier
        self.session: SessionModel | None = None
        self.user: UserModel | None = None
        self.loading = True
        self._subscription: Subscription | None = None

    async def initialize(self) -> None:
        try:
            session = await self.auth.get_session()
            await self._adopt(session)
        except AuthError as e:
            self.notifier.error("Error getting initial session", e)
        finally:
            self.loading = False

        if self._subscription is None:
            self._subscription = self.auth.on_auth_state_change(self._on_auth_change)

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_auth_change(self, event: AuthEvent, session: SessionModel | None) -> None:
        logger.debug("Auth state changed: %s", event.value)
        await self._adopt(session)
        self.loading = False

    async def _adopt(self, session: SessionModel | None) -> None:
        self.session = session
        if session is None:
            self.user = None
            return
        self.user = session.user
        await self.ensure_profile(session.user)

    async def ensure_profile(self, user: UserModel) -> bool:
        """
        Make sure ``user`` has a profile row, creating it if missing.

        The insert resolves conflicts on the id, so two sign-ins racing
        past the existence check still leave exactly one row.

        Returns:
            True if a profile exists afterwards
        """
        existing = await self.store.select(PROFILES, filters={"id": user.id})
        if existing.error:
            self.notifier.error("Error checking profile", existing.error)
            return False

        if existing.data:
            logger.debug("Profile already exists for %s", user.id)
            return True

        metadata: dict[str, Any] = user.user_metadata or {}
        row = {
            "id": user.id,
            "email": user.email,
            "first_name": metadata.get("first_name") or None,
            "last_name": metadata.get("last_name") or None,
        }
        created = await self.store.upsert(PROFILES, [row], on_conflict="id")
        if created.error:
            self.notifier.error("Error creating user profile", created.error)
            return False

        logger.info("Profile created for %s", user.email or user.id)
        return True

    async def sign_in(self, email: str, password: str) -> bool:
        """Sign in with a password; the change listener adopts the new user."""
        try:
            await self.auth.sign_in_with_password(email, password)
        except AuthError as e:
            self.notifier.error("Error signing in", e)
            return False
        self.notifier.success("Signed in", f"Welcome back, {email}.")
        return True

    async def sign_out(self) -> bool:
        try:
            await self.auth.sign_out()
        except AuthError as e:
            self.notifier.error("Error signing out", e)
            return False
        self.notifier.success("Signed out", "Your session has ended.")
        return True

    def guard(self) -> GuardState:
        """Route guard for authenticated views."""
        if self.loading:
            return GuardState.LOADING
        if self.user is None:
            return GuardState.REDIRECT
        return GuardState.ALLOW

    @property
    def user_id(self) -> str | None:
        return self.user.id if self.user else None
