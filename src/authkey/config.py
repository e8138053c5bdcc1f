"""
Application configuration with environment-driven settings.
"""

import os
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from authkey.shared.exceptions import ConfigurationError

# (field name, env name) pairs, in the order they are reported when missing.
REQUIRED_SETTINGS: tuple[tuple[str, str], ...] = (
    ("supabase_url", "SUPABASE_URL"),
    ("supabase_anon_key", "SUPABASE_ANON_KEY"),
    ("tailscale_oauth_client_id", "TAILSCALE_OAUTH_CLIENT_ID"),
    ("tailscale_oauth_client_secret", "TAILSCALE_OAUTH_CLIENT_SECRET"),
    ("tailnet_name", "TAILNET_NAME"),
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8000, ge=1, le=65535)

    # Identity store (Supabase PostgREST, row-level security)
    supabase_url: str = Field(
        default="",
        description="Supabase project URL",
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase public (anon) API key",
    )

    # Tailscale OAuth client
    tailscale_oauth_client_id: str = Field(default="")
    tailscale_oauth_client_secret: str = Field(default="")
    tailnet_name: str = Field(
        default="",
        description="Tailnet the issued keys join",
    )
    tailscale_api_base_url: str = Field(
        default="https://api.tailscale.com",
        description="Tailscale API base URL",
    )

    # Issued key shape
    authkey_tag: str = Field(default="tag:operator")
    authkey_expiry_seconds: int = Field(default=300, ge=1, le=86400)

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to each outbound call",
    )

    def missing_required(self) -> list[str]:
        """Return env names of required settings that are unset or blank."""
        return [
            env_name
            for field_name, env_name in REQUIRED_SETTINGS
            if not str(getattr(self, field_name) or "").strip()
        ]

    def ensure_configured(self) -> None:
        """Raise ConfigurationError unless every required setting is present."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(details={"missing": missing})

    @property
    def supabase_rest_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def tailscale_api_url(self) -> str:
        return f"{self.tailscale_api_base_url.rstrip('/')}/api/v2"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, built on first use."""
    global _settings
    # Under pytest env vars change between tests; never serve a frozen copy.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    if _settings is None:
        _settings = Settings()
    return _settings
