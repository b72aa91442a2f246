"""
Brand Savings - Configuration and settings.

Settings covers the record store (Supabase), the automation webhook,
and application-level switches. Values come from the environment or .env.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Edge Function that forwards submissions to the automation hook
WEBHOOK_FUNCTION_PATH = "/functions/v1/zapier-webhook"


class Settings(BaseSettings):
    """
    Application settings.

    Only the Supabase URL and anon key are required. The webhook URL and
    token fall back to the Supabase Edge Function and the anon key.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    submissions_table: str = "submissions"

    # Webhook
    webhook_url: str | None = None
    webhook_token: str | None = None
    webhook_timeout_seconds: float = 10.0

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def resolved_webhook_url(self) -> str:
        if self.webhook_url:
            return self.webhook_url
        return self.supabase_url.rstrip("/") + WEBHOOK_FUNCTION_PATH

    @property
    def resolved_webhook_token(self) -> str:
        return self.webhook_token or self.supabase_anon_key

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
