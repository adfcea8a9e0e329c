"""Configuration management for python-pusher-http."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import Credentials


class PusherConfig(BaseSettings):
    """
    Configuration for the Pusher HTTP client.

    Values are loaded from (in order of precedence):
    1. Constructor arguments
    2. Environment variables (prefixed with PUSHER_)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="PUSHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Required credentials
    app_id: str = Field(..., min_length=1, description="Pusher application ID")
    key: str = Field(..., min_length=1, description="Pusher application key")
    secret: SecretStr = Field(..., description="Pusher application secret")

    # Endpoint settings
    cluster: str = Field(default="mt1", description="Pusher cluster")
    use_tls: bool = Field(default=True, description="Use HTTPS")
    host: Optional[str] = Field(default=None, description="Explicit API host (overrides cluster)")
    port: Optional[int] = Field(default=None, description="Explicit API port")

    # Transport settings
    timeout: float = Field(default=30.0, description="HTTP request timeout (seconds)")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("secret")
    @classmethod
    def _secret_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("secret must not be empty")
        return value

    def build_base_url(self) -> str:
        """Construct the HTTP API base URL."""
        scheme = "https" if self.use_tls else "http"
        host = self.host or f"api-{self.cluster}.pusher.com"
        if self.port is not None:
            return f"{scheme}://{host}:{self.port}"
        return f"{scheme}://{host}"

    def credentials(self) -> Credentials:
        """Immutable credentials for the signers."""
        return Credentials(
            app_id=self.app_id,
            key=self.key,
            secret=self.secret.get_secret_value(),
        )
