"""
Application settings, loaded from the environment or a local ``.env`` file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    # MongoDB
    database_url: str = "mongodb://localhost:27017/"
    database_name: str = "appdb"
    enforce_unique_day: bool = True

    # Seconds each store call may take before it is aborted
    operation_timeout: Optional[float] = 10.0

    # Bearer tokens issued by the auth service
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    app_name: str = "Daily Diary API"
    app_version: str = "1.0.0"
    debug: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
