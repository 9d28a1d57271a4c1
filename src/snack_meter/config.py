"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    snack_store: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "snacks"
    commentary_backend: Literal["template", "openai"] = "template"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_store: bool = False
    leaderboard_size: int = 5
    memory_retain_per_type: int = 50
    expert_area_threshold: float = 100.0
    seed_hall_of_fame: bool = False
    random_seed: int | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def require_setting(value: str | None, name: str) -> str:
    """Return a configured value or raise if it is missing."""
    if value is None or not value.strip():
        raise ValueError(f"{name} must be set")
    return value.strip()
