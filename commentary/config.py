"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    """Platform API configuration."""

    base_url: str = "http://localhost:8000/api"
    timeout: float = 30.0

    # Bearer token of the signed-in profile (optional - anonymous reads work)
    access_token: str | None = None


class PaginationSettings(BaseModel):
    """Pagination configuration for the list and search modes."""

    page_size: int = Field(default=20, ge=1, le=100)


class ThreadSettings(BaseModel):
    """Thread view bounds."""

    # Number of ancestors shown above the focal comment
    parent_levels: int = Field(default=3, ge=0)

    # Reply depth below the focal comment before "show more replies"
    reply_depth: int = Field(default=6, ge=0)


class SearchSettings(BaseModel):
    """Search configuration."""

    # Queries shorter than this (after stripping) are not sent
    min_query_length: int = Field(default=2, ge=1)


class DisplaySettings(BaseModel):
    """Display configuration."""

    # Comments longer than this are clamped behind "show more"
    read_more_threshold: int = Field(default=150, ge=1)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nesting:

        API__BASE_URL=https://api.example.com
        API__ACCESS_TOKEN=...
        PAGINATION__PAGE_SIZE=20
        THREAD__REPLY_DEPTH=6
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows API__BASE_URL syntax
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    api: ApiSettings = ApiSettings()
    pagination: PaginationSettings = PaginationSettings()
    thread: ThreadSettings = ThreadSettings()
    search: SearchSettings = SearchSettings()
    display: DisplaySettings = DisplaySettings()
    observability: ObservabilitySettings = ObservabilitySettings()
