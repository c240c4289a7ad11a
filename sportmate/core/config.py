"""Configuration settings for the SportMate service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "SportMate Service")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/sportmate/v1")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sportmate.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "changeme")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Availability calendar
    AVAILABILITY_DAYS: int = int(os.getenv("AVAILABILITY_DAYS", "30"))
    OPENING_HOUR: int = int(os.getenv("OPENING_HOUR", "9"))
    CLOSING_HOUR: int = int(os.getenv("CLOSING_HOUR", "22"))

    # Chat
    MESSAGE_PAGE_SIZE: int = int(os.getenv("MESSAGE_PAGE_SIZE", "50"))
    MESSAGE_PAGE_MAX: int = int(os.getenv("MESSAGE_PAGE_MAX", "100"))
    HEARTBEAT_INTERVAL_SECONDS: float = float(
        os.getenv("HEARTBEAT_INTERVAL_SECONDS", "60")
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
