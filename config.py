"""Configuration for the event planner conflict service.

Settings are read from environment variables prefixed with ``PLANNER_``
and from an optional ``.env`` file in the working directory.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Args:
        conflict_window_days: Longest date window (in days) expanded when two
            recurring events are compared against each other.
        default_timezone: Zone used for creators with no stored zone.
        log_level: Standard library logging level name.
        environment: Deployment environment name.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    conflict_window_days: int = Field(
        default=31,
        ge=1,
        description="Maximum recurring-vs-recurring expansion window in days",
    )
    default_timezone: str = Field(
        default="UTC", description="Fallback zone for creators"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="production", description="Environment name")

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the default zone is a known IANA identifier."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone identifier: {value}") from exc
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
