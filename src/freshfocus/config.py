"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = {"file", "supabase"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    supabase_url: str
    supabase_key: str
    storage_backend: str = "file"
    data_dir: str = "data"
    recipe_count: int = 3
    scan_suppress_empty: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str | None) -> str:
    """Normalize the storage backend name, defaulting to local files."""
    if raw is None:
        return "file"
    cleaned = raw.strip().lower()
    if cleaned in STORAGE_BACKENDS:
        return cleaned
    return "file"
