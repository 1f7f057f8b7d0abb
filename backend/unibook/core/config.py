"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "UniBook Facility Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api/v1"

    # Key-value store
    STORE_BACKEND: str = "redis"  # redis, memory
    REDIS_URL: str = "redis://localhost:6379/0"
    BOOKING_KEY_PREFIX: str = "booking:"
    USER_KEY_PREFIX: str = "user:"

    # JWT Auth
    SECRET_KEY: str = "super-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # Booking workflow
    STRICT_SLOT_CONFLICTS: bool = False
    STRICT_STATUS_TRANSITIONS: bool = False
    REQUIRE_REJECTION_NOTES: bool = True

    # Notifications
    NOTIFICATION_SENDER: str = "UniBook Team"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
