from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ── Google Gemini (AI analysis report) ──────────────────────────────
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # ── Currency ────────────────────────────────────────────────────────
    # PHP per USD, applied only when a new session is logged without USD
    php_per_usd: float = 58.5

    # ── Dataset anchors (the seed data ends in Nov 2025) ────────────────
    current_month_start: str = "2025-11-01"
    current_month_end: str = "2025-11-30"
    last_month_start: str = "2025-10-01"
    last_month_end: str = "2025-10-31"
    last_week_start: str = "2025-11-14"
    all_time_start: str = "2025-01-01"
    all_time_end: str = "2025-12-31"

    # ── Views ───────────────────────────────────────────────────────────
    search_display_limit: int = 100
    recent_sessions_limit: int = Field(5, ge=0)

    # ── General ─────────────────────────────────────────────────────────
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
