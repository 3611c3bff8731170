"""SMTP configuration using Pydantic settings.

Environment Variables:
    SMTP_HOST: SMTP server host; empty disables delivery (default: "")
    SMTP_PORT: SMTP server port (default: 587)
    SMTP_USERNAME: Login user, empty for unauthenticated relays
    SMTP_PASSWORD: Login password (hidden in logs)
    SMTP_FROM_ADDRESS: Envelope and header sender
    SMTP_SSL: Connect with implicit TLS (usually port 465) instead of STARTTLS
    SMTP_TIMEOUT: Socket timeout in seconds (default: 10)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmtpSettings(BaseSettings):
    """Outbound mail server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="", description="SMTP server host")
    port: int = Field(default=587, ge=1, le=65535, description="SMTP server port")
    username: str = Field(default="", description="SMTP login user")
    password: str = Field(default="", repr=False, description="SMTP login password")
    from_address: str = Field(default="", description="Sender address")
    ssl: bool = Field(default=False, description="Use implicit TLS instead of STARTTLS")
    timeout: float = Field(default=10.0, gt=0, le=120, description="Socket timeout (seconds)")

    @property
    def configured(self) -> bool:
        return bool(self.host.strip())


@lru_cache(maxsize=1)
def get_smtp_settings() -> SmtpSettings:
    """Get the cached SMTP configuration."""
    return SmtpSettings()
