"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./guest_manager.db")

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LANGUAGE: str = os.getenv("LANGUAGE", "pt")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    # Seating
    DEFAULT_TABLE_CAPACITY: int = 8

    class Config:
        env_file = ".env"

settings = Settings()
