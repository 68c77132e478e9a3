from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "ShelfKeeper"
    ENVIRONMENT: str = "local"

    # ==============================
    # Persistence
    # ==============================
    # "database" (SQLAlchemy over DATABASE_URL) or "simulated" (demo data in memory)
    PERSISTENCE_BACKEND: str = "database"
    DATABASE_URL: str = "sqlite:///./shelfkeeper.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Auth provider (bearer JWT, caller id in "sub")
    # ==============================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None
    AUTH_DEV_USER_ID: Optional[str] = None

    # ==============================
    # Gemini advisory
    # ==============================
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    GEMINI_TIMEOUT_SECONDS: int = 30


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
