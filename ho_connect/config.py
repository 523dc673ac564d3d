"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./ho_connect.db",
        description="SQLAlchemy URL of the shared record store",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC+HH:MM offset) used for timestamps",
    )
    notification_ledger_limit: int = Field(
        default=100,
        description="Maximum number of records kept in the notification ledger",
        gt=0,
    )
    toast_limit: int = Field(
        default=5,
        description="Maximum number of toasts visible at once in one instance",
        gt=0,
    )
    toast_lifetime_seconds: float = Field(
        default=6.0,
        description="On-screen lifetime of locally dispatched non-mention toasts",
        gt=0,
    )
    mention_toast_lifetime_seconds: float = Field(
        default=12.0,
        description="On-screen lifetime of locally dispatched mention toasts",
        gt=0,
    )
    remote_mention_toast_lifetime_seconds: float = Field(
        default=10.0,
        description="On-screen lifetime of mention toasts received through a signal",
        gt=0,
    )
    presence_window_seconds: float = Field(
        default=300.0,
        description="Seconds since the last activity during which an employee is online",
        gt=0,
    )
    sync_indicator_seconds: float = Field(
        default=1.0,
        description="Seconds the sync indicator stays on after a signal arrives",
        gt=0,
    )
    openai_api_key: str | None = Field(
        default=None,
        description="API key used by the content generator",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Optional base URL for OpenAI compatible endpoints",
    )
    openai_model: str = Field(
        default="gpt-4.1-mini",
        description="Model used for idea generation and task drafting",
    )
    openai_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for the content generator",
        ge=0,
    )
    openai_max_output_tokens: int | None = Field(
        default=None,
        description="Upper bound for generated tokens; unset means the API default",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
