"""Centralized configuration for portal-search using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Limits mirror the portal defaults (20 history entries, 10 popular terms,
    5 suggestions, 10 facet values) and can be tuned per deployment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Storage
    store_path: str = Field(
        default="",
        description="JSON file backing the key-value store; empty keeps everything in memory",
    )

    # History / popular terms
    history_limit: int = Field(default=20, ge=1, description="Maximum number of remembered searches")
    popular_terms_limit: int = Field(default=10, ge=1, description="Number of popular terms reported")
    min_tracked_term_length: int = Field(
        default=3, ge=1, description="Shortest query term counted towards popular terms"
    )

    # Result shaping
    suggestion_limit: int = Field(default=5, ge=1, le=5, description="Maximum number of query suggestions")
    facet_limit: int = Field(default=10, ge=1, le=10, description="Maximum number of values kept per facet")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"Unsupported log level: {value}")
        return normalized

    def get_store_path(self) -> Path | None:
        """Return the store file path, or None for an in-memory store."""
        if not self.store_path.strip():
            return None
        return Path(self.store_path.strip()).expanduser()
