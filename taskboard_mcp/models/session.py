"""Session and identity models."""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserModel(BaseModel):
    """Authenticated identity as reported by the auth service."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class SessionModel(BaseModel):
    """A signed-in session: tokens plus the user they belong to."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user: UserModel

    def is_expired(self, leeway: int = 10) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at - leeway <= int(time.time())
