"""Configuration management service with Pydantic Settings.

This module loads the action inputs for the notifier. GitHub Actions
exposes each ``with:`` input as an ``INPUT_<NAME>`` environment variable
(upper-cased, hyphens kept); plain aliases are accepted for local runs.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_discord_notifier.notifier.models import Overrides, parse_hex_color
from github_discord_notifier.notifier.webhook import WebhookConfigError, validate_webhook_url


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class DiscordSettings(BaseSettings):
    """Discord webhook settings."""

    model_config = SettingsConfigDict(env_prefix="")

    webhook_url: SecretStr = Field(
        validation_alias=AliasChoices("INPUT_WEBHOOK-URL", "DISCORD_WEBHOOK_URL"),
        description="Discord webhook URL",
    )
    timeout: float = Field(
        default=10.0,
        validation_alias=AliasChoices("INPUT_TIMEOUT", "NOTIFY_TIMEOUT"),
        description="HTTP request timeout in seconds",
        gt=0,
        le=300,
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_url(cls, v: SecretStr) -> SecretStr:
        """Validate webhook URL format."""
        try:
            validate_webhook_url(v.get_secret_value())
        except WebhookConfigError as e:
            raise ValueError(str(e)) from e
        return SecretStr(v.get_secret_value().strip())


class NotificationSettings(BaseSettings):
    """Notification content settings."""

    model_config = SettingsConfigDict(env_prefix="")

    status: str = Field(
        default="success",
        validation_alias=AliasChoices("INPUT_STATUS", "INPUT_JOB-STATUS", "JOB_STATUS"),
        description="Job status: success, failure, cancelled or skipped",
    )
    title: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_TITLE", "NOTIFY_TITLE"),
        description="Custom embed title",
    )
    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_DESCRIPTION", "NOTIFY_DESCRIPTION"),
        description="Custom embed description",
    )
    color: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_COLOR", "NOTIFY_COLOR"),
        description="Custom embed color as 6 hex digits",
    )
    include_details: bool = Field(
        default=True,
        validation_alias=AliasChoices("INPUT_INCLUDE-DETAILS", "NOTIFY_INCLUDE_DETAILS"),
        description="Include repository, actor, ref and commit fields",
    )

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        """Treat an empty status input as success."""
        return _blank_to_none(v) or "success"

    @field_validator("title", "description", "color", mode="before")
    @classmethod
    def empty_as_unset(cls, v: Any) -> Any:
        """Treat empty inputs as not supplied."""
        return _blank_to_none(v)

    @field_validator("include_details", mode="before")
    @classmethod
    def default_include_details(cls, v: Any) -> Any:
        """Treat an empty include-details input as true."""
        value = _blank_to_none(v)
        return True if value is None else value

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        """Validate color is a 6-digit hex value."""
        if v is None:
            return v
        parse_hex_color(v)
        return v.strip().lstrip("#")


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from github_discord_notifier.config import get_settings

        settings = get_settings()
        print(settings.notification.status)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Nested configuration groups
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    notification: NotificationSettings = Field(default_factory=NotificationSettings)

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    dry_run: bool = Field(
        default=False,
        alias="DRY_RUN",
        description="Build the notification without sending it",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_overrides(self) -> Overrides:
        """Build notification overrides from the settings."""
        return Overrides(
            title=self.notification.title,
            description=self.notification.description,
            color=self.notification.color,
            include_details=self.notification.include_details,
        )

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with the webhook token masked.
        """
        return {
            "webhook_url": self._redact_webhook_url(self.discord.webhook_url.get_secret_value()),
            "timeout": str(self.discord.timeout),
            "status": self.notification.status,
            "title": self.notification.title or "(generated)",
            "description": self.notification.description or "(generated)",
            "color": self.notification.color or "(derived)",
            "include_details": str(self.notification.include_details),
            "log_level": self.log_level,
            "dry_run": str(self.dry_run),
        }

    @staticmethod
    def _redact_webhook_url(url: str) -> str:
        """Redact the token segment of a webhook URL."""
        if "://" not in url:
            return url
        head, sep, tail = url.rpartition("/")
        if not sep or not tail or head.endswith(":/"):
            return url
        return f"{head}/***"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Uses LRU cache to ensure settings are loaded only once and
    reused across the application.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If required environment variables are missing
            or have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
