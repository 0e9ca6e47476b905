"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    foods_index_table: str = "usda_foods_index"
    trigram_function: str = "search_foods_trigram"
    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    default_limit: int = 25
    over_fetch_multiplier: int = 3
    over_fetch_cap: int = 200
    populated_threshold: int = 100
    index_status_ttl_seconds: int = 300
    live_search_ttl_seconds: int = 3600
    live_retry_attempts: int = 1
    search_debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
