"""
Application configuration management using Pydantic Settings
Handles all environment variables and application settings
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    # Application Settings
    APP_NAME: str = "VERM Airdrop API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./airdrop.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_ECHO: bool = False

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:8080"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # Rate Limiting (requests per window, window in seconds)
    RATE_LIMIT_ENABLED: bool = True
    # Only enable behind a proxy that overwrites X-Forwarded-For
    RATE_LIMIT_TRUST_FORWARDED_FOR: bool = False
    RATE_LIMIT_PURGE_INTERVAL: int = 60
    RATE_LIMIT_REGISTRATION: int = 5
    RATE_LIMIT_REGISTRATION_WINDOW: int = 15 * 60
    RATE_LIMIT_VERIFICATION: int = 10
    RATE_LIMIT_VERIFICATION_WINDOW: int = 5 * 60
    RATE_LIMIT_GENERAL: int = 30
    RATE_LIMIT_GENERAL_WINDOW: int = 60

    # Referral Settings
    REFERRAL_CODE_LENGTH: int = 10
    REFERRAL_CODE_MAX_ATTEMPTS: int = 5

    # Liveness probe
    PING_MESSAGE: str = "ping"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url_async(self) -> str:
        """Convert sync database URL to async"""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif self.DATABASE_URL.startswith("sqlite://"):
            return self.DATABASE_URL.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return self.DATABASE_URL

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def worker_count(self, requested: Optional[int] = None) -> int:
        """Rate limit counters live in process memory, so limiting pins one worker"""
        workers = requested if requested is not None else self.WORKERS
        if self.RATE_LIMIT_ENABLED:
            return 1
        return max(1, workers)

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
