"""
Exchange lifecycle configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Tunables for exchanges, point awards and levels
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from skillswap.configs.base import BaseSettings


class ExchangeSettings(BaseSettings):
    """Exchange and gamification tunables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EXCHANGE_",
        case_sensitive=False,
        extra="ignore",
    )

    default_total_sessions: int = Field(
        default=3,
        ge=1,
        description="Sessions an exchange needs before it completes",
    )
    completion_points: int = Field(
        default=100,
        ge=0,
        description="Points awarded to each participant when an exchange completes",
    )
    points_per_level: int = Field(
        default=500,
        ge=1,
        description="Points needed to advance one level",
    )
