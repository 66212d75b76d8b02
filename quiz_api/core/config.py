"""Application configuration with environment variables."""
from typing import Dict, List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Question API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage
    DATABASE_URL: str = "sqlite://"
    STORE_BACKEND: str = "sqlalchemy"  # sqlalchemy / memory
    SEED_SAMPLE_DATA: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Authentication
    AUTH_MODE: str = "header"  # header / scope
    AUTH_USER_HEADER: str = "X-Remote-User"

    # Authorization
    CONTRIBUTOR_GROUP: str = "QuizContributers"
    MEMBERSHIP_BACKEND: str = "local"  # local / static
    STATIC_GROUP_MEMBERSHIPS: Dict[str, List[str]] = {}

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
