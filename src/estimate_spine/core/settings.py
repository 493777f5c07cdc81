"""Run settings for estimate-spine.

The workflow that schedules the reconciliation passes the target board through
environment variables (``TOKEN_TARGET_PROJECT_RW``, ``VAR_TARGET_PROJECT_*``).
``EstimateSettings`` reads those plus the ``ESTIMATE_``-prefixed knobs, validates
them once at startup and is then passed explicitly into the transport, gateway
and engine constructors. Nothing reads the environment after that.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, before any request
    - **Environment-driven:** Reads from env vars and .env files
    - **Typed failures:** ``load_settings`` turns validation errors into
      ``MissingConfigError`` / ``InvalidConfigError``

Examples:
    >>> from estimate_spine.core.settings import load_settings
    >>> settings = load_settings(
    ...     token="ghp_x", owner_type="user", owner_name="octocat", project_number=3,
    ... )
    >>> settings.target_field
    'Days Estimate'

Tags:
    settings, configuration, pydantic, environment, estimate-spine
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_core import PydanticCustomError
from pydantic_settings import BaseSettings, SettingsConfigDict

from estimate_spine.core.errors import ConfigError, InvalidConfigError, MissingConfigError

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_TARGET_FIELD = "Days Estimate"


class OwnerType(str, Enum):
    """Kind of account that owns the target project."""

    ORGANIZATION = "organization"
    USER = "user"


# Field name -> the only environment variable read for it
ENV_NAMES: dict[str, str] = {
    "token": "TOKEN_TARGET_PROJECT_RW",
    "owner_type": "VAR_TARGET_PROJECT_OWNER_TYPE",
    "owner_name": "VAR_TARGET_PROJECT_OWNER_NAME",
    "project_number": "VAR_TARGET_PROJECT_NUMBER_ID",
    "target_field": "ESTIMATE_TARGET_FIELD",
    "size_field": "ESTIMATE_SIZE_FIELD",
    "risk_field": "ESTIMATE_RISK_FIELD",
    "graphql_url": "ESTIMATE_GRAPHQL_URL",
    "http_timeout": "ESTIMATE_HTTP_TIMEOUT",
    "log_level": "ESTIMATE_LOG_LEVEL",
    "log_json": "ESTIMATE_LOG_JSON",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EstimateSettings(BaseSettings):
    """Settings for one reconciliation run.

    Fields
    ──────
    token          : Bearer token with read/write access to the project
    owner_type     : ``organization`` or ``user`` (case-insensitive)
    owner_name     : Login of the project owner
    project_number : Project number as shown in the board URL
    target_field   : Numeric field the computed estimate is written to
    size_field     : Single-select field holding the Size label
    risk_field     : Single-select field holding the Risk label
    graphql_url    : GraphQL endpoint
    http_timeout   : Transport timeout in seconds
    log_level      : Structlog log level
    log_json       : Force JSON (True) or console (False) logs; None auto-detects
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # ── Target board ─────────────────────────────────────────────
    token: SecretStr = Field(validation_alias=ENV_NAMES["token"])
    owner_type: OwnerType = Field(validation_alias=ENV_NAMES["owner_type"])
    owner_name: str = Field(validation_alias=ENV_NAMES["owner_name"])
    project_number: int = Field(gt=0, validation_alias=ENV_NAMES["project_number"])

    # ── Field names ──────────────────────────────────────────────
    target_field: str = Field(DEFAULT_TARGET_FIELD, validation_alias=ENV_NAMES["target_field"])
    size_field: str = Field("Size", validation_alias=ENV_NAMES["size_field"])
    risk_field: str = Field("Risk", validation_alias=ENV_NAMES["risk_field"])

    # ── Transport ────────────────────────────────────────────────
    graphql_url: str = Field(DEFAULT_GRAPHQL_URL, validation_alias=ENV_NAMES["graphql_url"])
    http_timeout: float = Field(30.0, gt=0, validation_alias=ENV_NAMES["http_timeout"])

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field("INFO", validation_alias=ENV_NAMES["log_level"])
    log_json: bool | None = Field(None, validation_alias=ENV_NAMES["log_json"])

    @field_validator("token")
    @classmethod
    def _token_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise PydanticCustomError("blank", "value is blank")
        return value

    @field_validator("owner_name", "target_field", "size_field", "risk_field")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("blank", "value is blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise PydanticCustomError(
                "log_level",
                "'{value}', but one of the following was expected: {levels}",
                {"value": value, "levels": list(LOG_LEVELS)},
            )
        return level

    @field_validator("owner_type", mode="before")
    @classmethod
    def _normalise_owner_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered not in {t.value for t in OwnerType}:
                raise PydanticCustomError(
                    "owner_type",
                    "'{value}', but one of the following was expected: ['organization', 'user']",
                    {"value": value},
                )
            return lowered
        return value


def _config_error(exc: ValidationError) -> ConfigError:
    """Translate the first pydantic error into a typed configuration error."""
    first = exc.errors()[0]
    loc = str(first["loc"][0]) if first.get("loc") else "settings"
    field_name = next((f for f, env in ENV_NAMES.items() if loc in (f, env)), loc)
    env_name = ENV_NAMES.get(field_name, loc)

    if first["type"] in ("missing", "blank"):
        return MissingConfigError(env_name)
    if first["type"] in ("owner_type", "log_level"):
        return InvalidConfigError(
            env_name,
            first.get("input"),
            message=f"`{env_name}` is {first['msg']}.",
        )
    return InvalidConfigError(
        env_name,
        first.get("input"),
        message=f"`{env_name}` is invalid: {first['msg']}.",
    )


def load_settings(**overrides: Any) -> EstimateSettings:
    """Build settings from the environment plus explicit overrides.

    Overrides are keyed by field name. ``None`` overrides are ignored so CLI
    options that were not given fall through to the environment.

    Raises:
        MissingConfigError: a required setting is absent or blank
        InvalidConfigError: a setting is present but malformed
    """
    values = {ENV_NAMES.get(key, key): value for key, value in overrides.items() if value is not None}
    try:
        return EstimateSettings(**values)
    except ValidationError as exc:
        raise _config_error(exc) from exc


__all__ = [
    "DEFAULT_GRAPHQL_URL",
    "DEFAULT_TARGET_FIELD",
    "ENV_NAMES",
    "EstimateSettings",
    "OwnerType",
    "load_settings",
]
