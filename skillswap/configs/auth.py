"""
Authentication configuration settings.

Bearer token verification parameters shared by the HTTP API and
the real-time endpoint.

Dependencies: pydantic, pydantic_settings
System role: Identity verification configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from skillswap.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT verification configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(
        default="change-me-in-production-use-a-32-byte-secret",
        description="HMAC secret used to sign and verify access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_ttl_minutes: int = Field(
        default=60 * 24,
        description="Lifetime of tokens minted by create_access_token",
    )
