"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from skillswap.configs.base import BaseSettings
from skillswap.configs.auth import AuthSettings
from skillswap.configs.database import DatabaseSettings
from skillswap.configs.exchange import ExchangeSettings
from skillswap.configs.realtime import RealtimeSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    exchange: ExchangeSettings = ExchangeSettings()
    realtime: RealtimeSettings = RealtimeSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from skillswap.configs import get_settings
        settings = get_settings()
    """
    return Settings()
