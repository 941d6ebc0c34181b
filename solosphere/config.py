"""
Application configuration loaded from environment variables.
Uses pydantic-settings for typed, validated config.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All environment variables read by the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Store ─────────────────────────────────────────────────
    store_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None   # bypasses RLS

    # ── Session token ─────────────────────────────────────────
    access_token_secret: str = "dev-only-secret-change-me"
    access_token_ttl_days: int = 360
    cookie_secure: bool = False       # True in production (SameSite=None)

    # ── HTTP ──────────────────────────────────────────────────
    cors_origins: list[str] = [
        "http://localhost:5173",
        "https://solosphere-client-7bcc2.web.app",
    ]
    strict_pagination: bool = False

    # ── Background jobs ───────────────────────────────────────
    reconcile_interval_minutes: int = 0   # 0 = disabled

    # ── App ───────────────────────────────────────────────────
    app_name: str = "solosphere"
    debug: bool = False


# Singleton — import this wherever config is needed
settings = Settings()
