"""
Application settings.
Load from environment variables (PROJECTION_*) or a local .env file.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the projection API"""

    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    api_prefix: str = "/api"
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    host: str = "127.0.0.1"
    port: int = 5000

    model_config = SettingsConfigDict(
        env_prefix="PROJECTION_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
