"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "WiFi Portal API"
    APP_VERSION: str = "3.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # MongoDB
    MONGODB_ENABLED: bool = True
    MONGODB_URI: str = "mongodb://localhost:27017/wifi-portal"
    MONGODB_DATABASE: str = "wifi-portal"
    MONGODB_COLLECTION: str = "users"
    MONGODB_TIMEOUT_MS: int = 5000

    # Portal
    REDIRECT_URL: str = "https://www.google.com"
    ACCESS_DURATION: str = "24 horas"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 500

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Create settings instance
settings = Settings()
