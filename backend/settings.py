"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and
validation. Variables are prefixed with ``DRAFT_`` (e.g. ``DRAFT_AUTOSAVE_DELAY_MS``).

Usage:
    from backend.settings import get_settings, Settings

    settings = get_settings()
    session = DraftSession(DocumentType.STRENGTH, saver, settings=settings)

    # Explicit overrides (tests, embedding hosts)
    settings = Settings(autosave_enabled=False, _env_file=None)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.models import DocumentType
from domain.validation import DurationBounds, RuleConfig


class Settings(BaseSettings):
    """Draft engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------
    history_max_entries: int = Field(
        default=20,
        ge=1,
        description="Maximum number of undo/redo snapshots kept per session",
    )

    # -------------------------------------------------------------------------
    # Auto-save
    # -------------------------------------------------------------------------
    autosave_enabled: bool = Field(
        default=True,
        description="Whether sessions start with auto-save enabled",
    )
    autosave_delay_ms: int = Field(
        default=3000,
        description="Quiet period after the last edit before auto-saving",
    )
    saved_status_reset_ms: int = Field(
        default=2000,
        description="Delay before a 'saved' status falls back to 'idle'",
    )

    # -------------------------------------------------------------------------
    # Drafts
    # -------------------------------------------------------------------------
    default_duration_minutes: int = Field(
        default=60,
        gt=0,
        description="Duration given to newly created drafts",
    )
    validate_on_change: bool = Field(
        default=True,
        description="Re-validate the draft in the background after every change",
    )

    # -------------------------------------------------------------------------
    # Validation Rules
    # -------------------------------------------------------------------------
    min_interval_seconds: int = Field(
        default=10,
        ge=0,
        description="Shortest allowed conditioning interval",
    )
    medical_heart_rate_threshold: int = Field(
        default=160,
        gt=0,
        description="Heart rate ceiling for players with intensity restrictions",
    )
    conditioning_min_total_seconds: Optional[int] = Field(
        default=None,
        ge=0,
        description="Lower bound for a conditioning program's total duration",
    )
    conditioning_max_total_seconds: Optional[int] = Field(
        default=None,
        ge=0,
        description="Upper bound for a conditioning program's total duration",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("autosave_delay_ms", "saved_status_reset_ms")
    @classmethod
    def validate_positive_delay(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Delays must be positive milliseconds")
        return v

    @model_validator(mode="after")
    def validate_conditioning_bounds(self) -> "Settings":
        low = self.conditioning_min_total_seconds
        high = self.conditioning_max_total_seconds
        if low is not None and high is not None and low > high:
            raise ValueError(
                "conditioning_min_total_seconds must not exceed conditioning_max_total_seconds"
            )
        return self

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"

    @property
    def autosave_delay_seconds(self) -> float:
        return self.autosave_delay_ms / 1000

    @property
    def saved_status_reset_seconds(self) -> float:
        return self.saved_status_reset_ms / 1000

    def to_rule_config(self) -> RuleConfig:
        """Build the validation rule configuration from these settings."""
        bounds = {}
        if (
            self.conditioning_min_total_seconds is not None
            or self.conditioning_max_total_seconds is not None
        ):
            bounds[DocumentType.CONDITIONING] = DurationBounds(
                min_seconds=self.conditioning_min_total_seconds,
                max_seconds=self.conditioning_max_total_seconds,
            )
        return RuleConfig(
            min_interval_seconds=self.min_interval_seconds,
            medical_heart_rate_threshold=self.medical_heart_rate_threshold,
            duration_bounds=bounds,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
