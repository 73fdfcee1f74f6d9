"""
Application configuration using environment variables.
"""
import os
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Digeon API"
    debug: bool = False
    environment: str = "development"

    # Security
    secret_key: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    refresh_token_expire_days: int = 7

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./digeon.db")

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Uploads
    upload_dir: str = "./uploads"
    base_url: str = "http://localhost:8080"
    max_image_size: int = 5 * 1024 * 1024
    max_video_size: int = 100 * 1024 * 1024
    max_upload_files: int = 4
    thumbnail_size: int = 800
    orphan_media_max_age_hours: int = 24

    # Rate limiting
    login_rate_limit: str = "5/minute"
    register_rate_limit: str = "3/minute"
    refresh_rate_limit: str = "10/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
if settings.environment == "production" and not os.getenv("SECRET_KEY"):
    raise ValueError(
        "SECRET_KEY must be set in production! "
        "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
    )
