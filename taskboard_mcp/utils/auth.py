"""Client for the remote authentication service."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from taskboard_mcp.config import Settings
from taskboard_mcp.enums import AuthEvent
from taskboard_mcp.errors import AuthError
from taskboard_mcp.models.session import SessionModel

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, SessionModel | None], Awaitable[None]]


class Subscription:
    """Handle returned by ``AuthClient.on_auth_state_change``."""

    def __init__(self, client: AuthClient, listener: AuthListener) -> None:
        self._client = client
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._client._remove_listener(self._listener)
            self.active = False


def _error_from_response(response: httpx.Response) -> AuthError:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = (
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
            or response.reason_phrase
        )
        code = body.get("error_code") or body.get("error") or body.get("code") or response.status_code
        return AuthError(str(message), str(code))
    return AuthError(response.text.strip() or response.reason_phrase, str(response.status_code))


def _session_payload(response: httpx.Response) -> dict[str, Any]:
    """Decode a token response body; anything but a JSON object is rejected."""
    try:
        payload = response.json()
    except ValueError as e:
        raise AuthError(f"Invalid response body (HTTP {response.status_code})", "invalid_response") from e
    if not isinstance(payload, dict):
        raise AuthError(f"Invalid response body (HTTP {response.status_code})", "invalid_response")
    return payload



class AuthClient:
    """
    Session owner for the password grant flow.

    Holds at most one session. Listeners registered with
    ``on_auth_state_change`` are awaited, in order, after each change.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._session: SessionModel | None = None
        self._listeners: list[AuthListener] = []
        self._client = httpx.AsyncClient(
            base_url=settings.auth_url,
            timeout=settings.timeout,
            transport=transport,
            headers={"apikey": settings.anon_key},
        )

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    async def aclose(self) -> None:
        await self._client.aclose()

    # --- Listeners ---

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove_listener(self, listener: AuthListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def _emit(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            await listener(event, self._session)

    # --- Persistence ---

    def _load_persisted(self) -> SessionModel | None:
        path = self._settings.session_file
        if path is None or not path.exists():
            return None
        try:
            return SessionModel.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", path, e)
            return None

    def _persist(self) -> None:
        path: Path | None = self._settings.session_file
        if path is None:
            return
        if self._session is None:
            path.unlink(missing_ok=True)
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._session.model_dump_json(), encoding="utf-8")

    def _adopt(self, payload: dict[str, Any]) -> SessionModel:
        if payload.get("expires_at") is None and payload.get("expires_in") is not None:
            payload = {**payload, "expires_at": int(time.time()) + int(payload["expires_in"])}
        try:
            session = SessionModel.model_validate(payload)
        except ValidationError as e:
            raise AuthError(f"Malformed session payload: {e.error_count()} error(s)", "invalid_session") from e
        self._session = session
        self._persist()
        return session

    # --- Remote calls ---

    async def _post(self, path: str, *, params: dict[str, str] | None = None, json: Any = None) -> httpx.Response:
        headers = {}
        if self._session is not None:
            headers["Authorization"] = f"Bearer {self._session.access_token}"
        try:
            response = await self._client.post(path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise AuthError(f"{type(e).__name__}: {e}", "network") from e
        if response.is_error:
            raise _error_from_response(response)
        return response

    async def get_session(self) -> SessionModel | None:
        """
        Return the current session, restoring it from disk on first use.

        An expired session is refreshed with its refresh token; if that is
        not possible the session is dropped.

        Raises:
            AuthError: If the refresh call fails
        """
        if self._session is None:
            self._session = self._load_persisted()
        if self._session is None or not self._session.is_expired():
            return self._session

        refresh_token = self._session.refresh_token
        if not refresh_token:
            self._session = None
            self._persist()
            return None

        try:
            response = await self._post(
                "/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": refresh_token},
            )
            session = self._adopt(_session_payload(response))
        except AuthError:
            self._session = None
            self._persist()
            raise
        logger.info("Refreshed session for %s", session.user.email or session.user.id)
        await self._emit(AuthEvent.TOKEN_REFRESHED)
        return session

    async def sign_in_with_password(self, email: str, password: str) -> SessionModel:
        """
        Exchange email and password for a session.

        Raises:
            AuthError: On rejected credentials or transport failure
        """
        response = await self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = self._adopt(_session_payload(response))
        logger.info("Signed in as %s", session.user.email or session.user.id)
        await self._emit(AuthEvent.SIGNED_IN)
        return session

    async def sign_out(self) -> None:
        """
        End the session locally and remotely.

        The local session is always cleared and listeners are notified,
        even when the remote logout call fails.

        Raises:
            AuthError: If the remote logout call fails
        """
        if self._session is None:
            return
        error: AuthError | None = None
        try:
            await self._post("/logout")
        except AuthError as e:
            error = e
        self._session = None
        self._persist()
        await self._emit(AuthEvent.SIGNED_OUT)
        if error is not None:
            raise error
