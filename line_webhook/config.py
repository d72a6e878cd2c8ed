"""Application configuration"""

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache
from pathlib import Path

# Project root (parent of the package directory)
BASE_DIR = Path(__file__).parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings"""
    
    # Application
    APP_NAME: str = "LINE Bot Webhook"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    
    # LINE channel
    LINE_CHANNEL_SECRET: str = ""
    LINE_CHANNEL_TOKEN: str = ""
    
    # Messaging API
    LINE_API_ENDPOINT: str = "https://api.line.me/"
    LINE_CONNECT_TIMEOUT: float = 10.0
    LINE_READ_TIMEOUT: float = 10.0
    
    # Webhook
    LINE_CALLBACK_PATH: str = "/callback"
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    model_config = ConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
