from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Any, Optional
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Dynamic REST API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./mock_api.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # ==========================================
    # CORS
    # ==========================================
    CORS_ORIGINS_STR: str = (
        "http://localhost:5173,http://127.0.0.1:5173,"
        "http://localhost:3000,http://localhost:8081"
    )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty disables the file handler

    # ==========================================
    # Mock engine
    # ==========================================
    MOCK_PREFIX: str = "/api/mock"
    MOCK_LIST_HARD_CAP: int = 100  # Max items generated per list response
    MOCK_MAX_DELAY_MS: int = 5000
    MOCK_API_KEY_HEADER: str = "x-api-key"
    MOCK_DEFAULT_PAGE_LIMIT: int = 10
    MOCK_FAKER_LOCALE: str = "en_US"
    MOCK_FAKER_SEED: Optional[int] = None

    # ==========================================
    # Rate limiting (mock traffic)
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 120
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # e.g. redis://localhost:6379/1

    @field_validator("MOCK_PREFIX")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = "/" + v.strip("/")
        return v

    @field_validator("MOCK_LIST_HARD_CAP")
    @classmethod
    def positive_cap(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MOCK_LIST_HARD_CAP must be at least 1")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Create log directory if a file log is configured
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def get_database_url(self) -> str:
        """Database URL with the async driver the engine needs"""
        db_url = self.DATABASE_URL
        if db_url.startswith("postgresql://"):
            db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif db_url.startswith("sqlite:///"):
            db_url = db_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return db_url


# Create settings instance
settings = Settings()
