"""Session configuration via environment variables."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32


class CookieOptions(BaseModel):
    """Attributes applied to the outbound session cookie."""

    path: str = "/"
    secure: bool = True
    http_only: bool = True
    max_age: int | None = None  # seconds
    domain: str | None = None
    same_site: str | None = None


class SessionSettings(BaseSettings):
    secret: str
    cookie_name: str = "sessionId"
    cookie: CookieOptions = Field(default_factory=CookieOptions)
    save_uninitialized: bool = True
    # Honour X-Forwarded-Proto when deciding whether a secure cookie may be set
    trust_proxy: bool = True
    backend: Literal["memory", "dynamodb"] = "memory"
    dynamodb_table: str = "sessions"
    dynamodb_endpoint: str = ""  # For local DynamoDB
    dynamodb_region: str = "us-west-2"

    model_config = {
        "env_prefix": "SESSION_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }

    @field_validator("secret")
    @classmethod
    def _check_secret(cls, value: str) -> str:
        check_secret(value)
        return value


def check_secret(secret: str | None) -> None:
    if not secret:
        logger.warning("Session secret is not configured")
        raise ConfigurationError("the secret option is required!")
    if len(secret) < MIN_SECRET_LENGTH:
        logger.warning("Session secret is shorter than %d characters", MIN_SECRET_LENGTH)
        raise ConfigurationError(
            f"the secret must have length {MIN_SECRET_LENGTH} or greater"
        )


settings: SessionSettings | None = None


def get_settings() -> SessionSettings:
    global settings
    if settings is None:
        settings = SessionSettings()
    return settings


def override_settings(s: SessionSettings | None) -> None:
    """For testing: inject a SessionSettings instance (None resets)."""
    global settings
    settings = s
