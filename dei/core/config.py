"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Repository root (one level above the dei package)
ROOT_DIR = Path(__file__).parent.parent.parent
ENV_FILE = ROOT_DIR / ".env"

MEDIUM_RSS_URL = "https://medium.com/feed/data-engineering-indonesia"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (hosted Postgres). Both empty means sample data only.
    supabase_url: str = Field(
        default="",
        validation_alias=AliasChoices("PUBLIC_SUPABASE_URL", "SUPABASE_URL"),
    )
    supabase_anon_key: str = Field(
        default="",
        validation_alias=AliasChoices("PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY"),
    )

    # Medium feed
    medium_feed_url: str = MEDIUM_RSS_URL

    # Site metadata. Anything not set in the environment is served empty.
    site_name: str = "Data Engineering Indonesia"
    site_description: str = ""
    site_url: str = ""
    site_email: str = ""
    site_linkedin_url: str = ""
    site_telegram_url: str = ""
    site_medium_url: str = "https://medium.com/data-engineering-indonesia"
    site_founded_year: Optional[int] = None
    site_member_count: Optional[int] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )

    @property
    def supabase_configured(self) -> bool:
        """True only when both the endpoint and the anon key are present."""
        return bool(self.supabase_url.strip() and self.supabase_anon_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process."""
    return Settings()
