"""Configuration settings for run-analytics."""

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


# __file__ = src/run_analytics/config.py
PACKAGE_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Analytics defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RUN_ANALYTICS_",
        env_file=str(PACKAGE_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Athlete physiology
    max_hr: float = 190.0
    resting_hr: float = 60.0
    sex: str = "male"
    trimp_constant: float | None = None  # Overrides the sex preset when set

    # Fitness-fatigue model
    atl_window_days: int = 7
    ctl_window_days: int = 42
    cold_start_days: int = 7

    # Race prediction
    race_lookback_days: int = 56
    race_min_distance_m: float = 3000.0
    riegel_exponent: float = 1.06

    # Calendar used to bucket workouts into days (IANA name, e.g. "Europe/Madrid")
    timezone: str | None = None

    def resolve_timezone(self) -> tzinfo | None:
        """Resolve the configured timezone name, or None for naive day bucketing."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                f"Unknown timezone: {self.timezone}",
                setting="timezone",
            ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
