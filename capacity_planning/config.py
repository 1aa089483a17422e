"""
Configuration for the capacity planning core.

Module-level constants carry the defaults used throughout the calculators.
`Settings` lets a deployment override them from `CAPACITY_*` environment
variables or a `.env` file; the API reads the shared instance returned by
`get_settings()`.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASELINE_MONTHLY_HOURS = 160
WORKDAY_HOURS = 8
PIPELINE_ACTIVATION_PROBABILITY = 60
DEFAULT_FORECAST_MONTHS = 6
UPCOMING_TIME_OFF_WINDOW_DAYS = 60
PIPELINE_MONTHLY_WINDOW_DAYS = 30
EXECUTIVE_SEARCH_SALARY_THRESHOLD = 100_000


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CAPACITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    API_TITLE: str = "Consultant Capacity Planning API"
    API_VERSION: str = "0.1.0"

    BASELINE_MONTHLY_HOURS: float = Field(BASELINE_MONTHLY_HOURS, ge=0)
    WORKDAY_HOURS: float = Field(WORKDAY_HOURS, gt=0)
    PIPELINE_ACTIVATION_PROBABILITY: int = Field(PIPELINE_ACTIVATION_PROBABILITY, ge=0, le=100)
    DEFAULT_FORECAST_MONTHS: int = Field(DEFAULT_FORECAST_MONTHS, ge=1, le=36)
    UPCOMING_TIME_OFF_WINDOW_DAYS: int = Field(UPCOMING_TIME_OFF_WINDOW_DAYS, ge=0)
    SALARY_THRESHOLD: float = Field(EXECUTIVE_SEARCH_SALARY_THRESHOLD, ge=0)

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
