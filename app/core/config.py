"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).

The recommendation engine never reads these settings implicitly: they
are turned into :class:`~app.intelligence.activity.AnalyzerConfig` and
:class:`~app.intelligence.ranking.RankerConfig` through their
``from_settings`` constructors by the caller.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Exercise Intelligence: workload analysis and exercise recommendations."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = []

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Recommendation engine
    ANALYSIS_WINDOW_DAYS: int = Field(31, ge=1, le=365)
    DEFAULT_RECOMMENDATION_COUNT: int = Field(5, ge=0)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` forces debug logging regardless of ``LOG_LEVEL``."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


# Global settings instance
settings = Settings()
