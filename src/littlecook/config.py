"""
My Little Cook - Configuration and settings.

Loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class LittleCookSettings(BaseSettings):
    """
    Application settings.

    Supabase credentials are required; everything else has a default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str

    # Application
    littlecook_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Session cookie set by the front end after Supabase sign-in
    session_cookie_name: str = "mlc_session"

    # Front-end dev servers
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @property
    def is_development(self) -> bool:
        return self.littlecook_env == "development"

    @property
    def is_production(self) -> bool:
        return self.littlecook_env == "production"


@lru_cache
def get_settings() -> LittleCookSettings:
    """Get cached settings instance."""
    return LittleCookSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: LittleCookSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
