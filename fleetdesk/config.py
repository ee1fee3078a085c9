"""
Configuration settings for the fleet back office.
Uses Pydantic for type-safe configuration management.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Fleetdesk"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./fleetdesk.db"

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # API
    api_v1_prefix: str = "/api/v1"

    # Calendar rules
    timezone: str = "America/Sao_Paulo"
    expiry_window_days: int = 30

    # File storage
    blob_root: str = "./storage"
    blob_view_base_url: str = "/api/v1/files/download?file_id="
    fuel_folder_name: str = "combustivel"
    fuel_data_file: str = "fuel_data.json"

    # Legacy browser cache dump, seeded once into the database
    legacy_cache_path: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
