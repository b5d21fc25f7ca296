"""
Configuration management with pydantic-settings.

Every setting can be overridden from the environment or a .env file.
Defaults are enough to run the scraper and the API locally.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Source page ───────────────────────────────────────────────────
    device_list_url: str = Field(
        default="https://neuraldsp.com/device-list",
        description="Page listing every Quad Cortex device by category.",
    )
    request_timeout: float = Field(
        default=30.0,
        description="Upper bound in seconds for the page fetch.",
    )

    # ── Structural markers (generated classes on the source page) ─────
    device_row_selector: str = Field(
        default="div.sc-97391185-0",
        description="CSS selector for a data row inside a category container.",
    )
    device_cell_selector: str = Field(
        default="div.sc-ec576641-0",
        description="CSS selector for a cell inside a data row.",
    )

    # ── Storage ───────────────────────────────────────────────────────
    snapshot_path: str = Field(
        default="data/devices.json",
        description="JSON snapshot overwritten on every successful scrape.",
    )
    fixture_path: str = Field(
        default="tests/fixtures/device-list.html",
        description="Where the fixture command saves the raw page HTML.",
    )
    refresh_on_missing_snapshot: bool = Field(
        default=False,
        description="Scrape inline when the API finds no snapshot on disk.",
    )

    # ── Redis / ARQ ───────────────────────────────────────────────────
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection string for ARQ workers.",
    )

    # ── Notifications ─────────────────────────────────────────────────
    slack_webhook_url: str = Field(
        default="",
        description="Slack incoming webhook URL for scrape alerts.",
    )

    # ── Logging ───────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")


# Singleton instance, import this everywhere
settings = Settings()
