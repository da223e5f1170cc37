"""Configuration and credential resolution for the Mercury MCP server."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_BASE_URL = "https://api.mercury.com/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_SERVER_NAME = "mercury"

API_KEY_ENV = "MERCURY_API_KEY"
BASE_URL_ENV = "MERCURY_BASE_URL"
TIMEOUT_ENV = "MERCURY_TIMEOUT"


class ConfigurationError(RuntimeError):
    """Raised when configuration or credential loading fails."""


class MercurySettings(BaseModel):
    """Settings resolved once at startup and never mutated afterwards."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    server_name: str = DEFAULT_SERVER_NAME

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("API key must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be greater than zero")
        return value


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None


def load_settings(
    api_key: str | None = None,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
) -> MercurySettings:
    """Resolve settings from explicit values first, then the environment.

    A missing credential is fatal: callers are expected to abort startup on
    :class:`ConfigurationError` rather than serve tools that cannot work.
    """

    environ = os.environ if env is None else env

    resolved_key = _first_non_empty(api_key, environ.get(API_KEY_ENV))
    if resolved_key is None:
        raise ConfigurationError(
            f"Please provide a Mercury API key as an argument or via the {API_KEY_ENV} environment variable."
        )

    values: dict[str, object] = {"api_key": resolved_key}

    resolved_url = _first_non_empty(base_url, environ.get(BASE_URL_ENV))
    if resolved_url is not None:
        values["base_url"] = resolved_url

    if timeout is not None:
        values["timeout_seconds"] = timeout
    else:
        raw_timeout = _first_non_empty(environ.get(TIMEOUT_ENV))
        if raw_timeout is not None:
            try:
                values["timeout_seconds"] = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}") from exc

    try:
        return MercurySettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid Mercury configuration: {exc}") from exc


__all__ = [
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "ConfigurationError",
    "DEFAULT_BASE_URL",
    "DEFAULT_SERVER_NAME",
    "DEFAULT_TIMEOUT_SECONDS",
    "MercurySettings",
    "TIMEOUT_ENV",
    "load_settings",
]
