"""
Configuration settings for the SkillSwap API.
Loads environment variables and provides application settings.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List

# settings.py is at skillswap/config/settings.py → 3 levels up
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - any SQLAlchemy async URL (sqlite+aiosqlite, postgresql+asyncpg)
    database_url: str = f"sqlite+aiosqlite:///{_PROJECT_ROOT}/data/skillswap.db"
    database_echo: bool = False  # Log every SQL statement
    create_tables_on_startup: bool = True  # Run metadata.create_all in lifespan

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    # Seed reference data (skill categories, system roles) on startup
    seed_on_startup: bool = False

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
