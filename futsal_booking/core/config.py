"""Configuration settings for the futsal booking service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Futsal Booking Service")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/futsal/v1")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./futsal_booking.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "changeme")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CREATE_TABLES_ON_STARTUP: bool = _as_bool(os.getenv("CREATE_TABLES_ON_STARTUP", "true"))
    BOOKING_SWEEP_ENABLED: bool = _as_bool(os.getenv("BOOKING_SWEEP_ENABLED", "true"))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
