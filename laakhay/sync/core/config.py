"""Run configuration.

Architecture:
    Configuration is an explicit, immutable struct handed to the engine at
    construction. Values come from a key/value source (a ``.env`` file read
    with python-dotenv, merged over the process environment) and are
    validated with pydantic. Nothing else in the library reads the
    environment; credential refresh goes through a CredentialProvider.

Design Decisions:
    - Frozen pydantic models: configuration cannot drift mid-run
    - Env-style aliases: field names map 1:1 to the documented keys
    - One ValidationError type: callers only need to catch library errors
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import timedelta
from pathlib import Path
from typing import Any, ClassVar, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import MissingCredentialError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS_URL = (
    "https://staging-trm-api.topstep.com/admin/impact-groups/accounts/enqueue-account-assignments"
)
DEFAULT_INTERVALS_URL = "https://trm-api.topstep.com/admin/accounts/syncTimeIntervalTopstepX"
DEFAULT_TIMEZONE = "America/Chicago"

ConfigT = TypeVar("ConfigT", bound="BaseSyncConfig")


def mask_token(token: str, visible: int = 10) -> str:
    """Return a log-safe rendering of a bearer token."""
    return f"{token[:visible]}..."


class BaseSyncConfig(BaseModel):
    """Settings shared by every sync variant."""

    auth_token: str = Field(..., min_length=1)
    api_url: str = Field(..., min_length=1)
    request_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0)
    inter_chunk_delay: float = Field(default=1.0, ge=0)

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    # Key in the configuration source that holds the bearer token
    credential_key: ClassVar[str] = "AUTH_TOKEN"

    @classmethod
    def from_mapping(cls: type[ConfigT], values: Mapping[str, Any]) -> ConfigT:
        """Build a config from env-style keys, dropping empty values."""
        data = {key: value for key, value in values.items() if value not in (None, "")}
        token_key = cls.credential_key
        if token_key not in data:
            raise MissingCredentialError(
                f"{token_key} is required. Please set it in your .env file."
            )
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(_summarize(e)) from e

    def describe(self) -> dict[str, Any]:
        """Loggable view of the configuration with the credential masked."""
        data = self.model_dump(exclude={"auth_token"})
        data["auth_token"] = mask_token(self.auth_token)
        return data


class AccountSyncConfig(BaseSyncConfig):
    """Settings for grouped account assignment runs."""

    auth_token: str = Field(..., min_length=1, alias="AUTH_TOKEN")
    api_url: str = Field(default=DEFAULT_ACCOUNTS_URL, min_length=1, alias="API_URL")
    batch_size: int = Field(default=100, gt=0, alias="BATCH_SIZE")
    csv_filename: str = Field(default="test_impact_groups.csv", alias="CSV_FILENAME")
    max_accounts: int = Field(default=1000, gt=0, alias="MAX_ACCOUNTS")
    api_max_accounts: int | None = Field(default=None, gt=0, alias="API_MAX_ACCOUNTS")
    api_batch_size: int | None = Field(default=None, gt=0, alias="API_BATCH_SIZE")
    group_size_warning: int = Field(default=200, gt=0)


class IntervalSyncConfig(BaseSyncConfig):
    """Settings for time-window sync runs."""

    credential_key: ClassVar[str] = "BEARER_TOKEN"

    auth_token: str = Field(..., min_length=1, alias="BEARER_TOKEN")
    api_url: str = Field(default=DEFAULT_INTERVALS_URL, min_length=1, alias="API_URL")
    start_date: str = Field(..., min_length=1, alias="START_DATE")
    end_date: str = Field(..., min_length=1, alias="END_DATE")
    timezone: str = Field(default=DEFAULT_TIMEZONE, alias="TIMEZONE")
    window_hours: float = Field(default=2.0, gt=0, alias="WINDOW_HOURS")
    inter_chunk_delay: float = Field(default=2.0, ge=0)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names the tz database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {v!r}") from e
        return v

    @property
    def window_duration(self) -> timedelta:
        return timedelta(hours=self.window_hours)


def read_source(env_file: str | Path | None = ".env") -> dict[str, str | None]:
    """Read the configuration source: process environment overlaid by the env file."""
    values: dict[str, str | None] = dict(os.environ)
    if env_file is not None and Path(env_file).exists():
        values.update(dotenv_values(env_file))
    return values


def load_config(cls: type[ConfigT], env_file: str | Path | None = ".env") -> ConfigT:
    """Load and validate a config of type ``cls`` from the configuration source.

    Raises:
        MissingCredentialError: If the credential key is absent
        ValidationError: If any other value is missing or invalid
    """
    config = cls.from_mapping(read_source(env_file))
    logger.info("Configuration loaded", extra={"config": config.describe()})
    return config


def _summarize(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        parts.append(f"{location}: {item['msg']}")
    return "Invalid configuration: " + "; ".join(parts)
