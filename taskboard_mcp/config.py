"""Environment-driven settings for Taskboard MCP."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "TASKBOARD_"


class Settings(BaseModel):
    """Connection and behaviour settings for the remote task backend."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    url: str = Field(..., description="Base URL of the backend project", min_length=1)
    anon_key: str = Field(..., description="Public (anon) API key", min_length=1)
    email: str | None = Field(default=None, description="Account used to sign in at startup")
    password: str | None = Field(default=None, description="Password for the startup account")
    session_file: Path | None = Field(default=None, description="Where to persist the signed-in session")
    timeout: float = Field(default=30.0, description="Transport timeout in seconds", gt=0)
    default_due_days: int = Field(default=7, description="Days until due for new tasks without a due date", ge=0)
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.url}/auth/v1"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """
        Build settings from ``TASKBOARD_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Validated Settings instance

        Raises:
            pydantic.ValidationError: If a required variable is missing or invalid
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        return cls.model_validate(values)
