"""Console configuration loaded from the environment."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsoleSettings(BaseSettings):
    """Runtime configuration for the admin console."""

    api_url: str = Field(default="http://localhost:8000/api", alias="ADMIN_CONSOLE_API_URL")
    token: Optional[str] = Field(default=None, alias="ADMIN_CONSOLE_TOKEN")
    poll_seconds: float = Field(default=10.0, gt=0, alias="ADMIN_CONSOLE_POLL_SECONDS")
    export_limit: int = Field(default=1000, ge=1, alias="ADMIN_CONSOLE_EXPORT_LIMIT")

    model_config = SettingsConfigDict(
        env_file=(".env.local", ".env"), env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_console_settings() -> ConsoleSettings:
    """Return cached console settings instance."""
    return ConsoleSettings()
