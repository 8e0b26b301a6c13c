"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.

Only forecast parameters are tunable here. Driver weights and status bands
are fixed in the formula and cannot be overridden from the environment.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings

from ..scoring.helpers import DEFAULT_FORMULA, FormulaConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Forecast
    FORECAST_HORIZON_WEEKS: int = 4
    FORECAST_BASE_VARIANCE: float = 3.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase

    def formula(self) -> FormulaConfig:
        """Canonical formula with this environment's forecast parameters."""
        return DEFAULT_FORMULA.with_forecast(
            horizon_weeks=self.FORECAST_HORIZON_WEEKS,
            base_variance=self.FORECAST_BASE_VARIANCE,
        )


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
