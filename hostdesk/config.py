"""
Application configuration using Pydantic Settings
"""

from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Console settings loaded from environment variables"""

    # Restaurant REST API (the collaborator that owns persistence)
    api_base_url: str = "http://localhost:3000"
    api_timeout: float = 30.0
    restaurant_id: int = 1

    # Floor defaults
    default_time_zone: str = "Pacific/Guam"
    service_start_hour: int = 18
    default_allocation_minutes: int = 60
    default_layout_size: str = "auto"

    # Staff session persistence
    session_file: str = "~/.hostdesk/session.json"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    cors_origins: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    class Config:
        env_prefix = "HOSTDESK_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
