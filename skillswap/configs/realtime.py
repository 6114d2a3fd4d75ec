"""
Real-time coordinator configuration settings.

Dependencies: pydantic, pydantic_settings
System role: WebSocket protocol and delivery tunables
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from skillswap.configs.base import BaseSettings


class RealtimeSettings(BaseSettings):
    """Real-time session coordinator configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REALTIME_",
        case_sensitive=False,
        extra="ignore",
    )

    protocol_version: int = Field(default=1, description="Envelope version spoken by the server")
    outbox_size: int = Field(
        default=256,
        ge=1,
        description="Outbound messages buffered per connection before dropping",
    )
