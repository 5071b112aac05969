"""Due-date notification digest settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ScanScope = Literal["assigned", "member"]


class NotificationSettings(BaseSettings):
    """Settings for the notification digest scan.

    Environment variables use NOTIFY_ prefix.
    Example: NOTIFY_SCOPE=member, NOTIFY_MAX_CONCURRENCY=4
    """

    scope: ScanScope = Field(
        default="assigned",
        description=(
            "Board enumeration scope. 'assigned' scans every board and keeps cards "
            "assigned to the caller; 'member' scans only the caller's boards."
        ),
    )
    closed_status_keywords: tuple[str, ...] = Field(
        default=("complete", "done", "archive"),
        min_length=1,
        description="Case-insensitive substrings marking a status as closed (JSON array in env)",
    )
    max_concurrency: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum number of card listings fetched in parallel",
    )
    scan_timeout_seconds: float | None = Field(
        default=10.0,
        gt=0,
        description="Deadline for a whole digest scan. None disables the deadline.",
    )
    data_file: Path | None = Field(
        default=None,
        description="JSON board export used as the board source",
    )

    @field_validator("closed_status_keywords")
    @classmethod
    def _lowercase_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(keyword.lower() for keyword in v)

    model_config = SettingsConfigDict(
        env_prefix="NOTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
