"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    nutrition_cache_ttl_seconds: int = 86400
    nutrition_cache_max_entries: int = 1024
    nutrition_retry_attempts: int = 1
    supabase_page_size: int = 1000
    allowed_user_ids: str | None = None
    enforce_meal_ownership: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_user_ids(raw: str | None) -> set[str] | None:
    """Parse the comma-separated user allowlist; None means everyone."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    ids = {chunk.strip() for chunk in cleaned.split(",") if chunk.strip()}
    return ids or None
