"""Application configuration models and utilities."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    admin_api_token: str = Field(default="dev-admin-token", alias="ADMIN_API_TOKEN")
    app_name: str = Field(default="Travel Admin Mock API", alias="APP_NAME")
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")
    default_currency: str = Field(default="RWF", alias="DEFAULT_CURRENCY")
    max_page_size: int = Field(default=1000, ge=1, alias="MAX_PAGE_SIZE")
    admin_user_id: str = Field(default="usr_admin", alias="ADMIN_USER_ID")
    environment: str = Field(default="development", alias="APP_ENV")

    model_config = SettingsConfigDict(
        env_file=(".env.local", ".env"), env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached app settings instance."""
    return Settings()
