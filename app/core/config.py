import os
from typing import Any, Dict, List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import validator, model_validator


class Settings(BaseSettings):
    """Application settings."""

    # App config
    PROJECT_NAME: str = "Products Catalog API"
    APP_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "Product catalog served through a cache-aside repository"
    APP_ENV: str = "development"
    DEBUG: bool = True

    # Server Config
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8000

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # Database
    # Mặc định dùng SQLite in-memory, dữ liệu mất khi tắt ứng dụng
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    DB_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    SEED_DATABASE: Optional[bool] = None

    # Redis
    REDIS_HOST: str = os.environ.get("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.environ.get("REDIS_PORT", "6379"))
    REDIS_PASSWORD: Optional[str] = os.environ.get("REDIS_PASSWORD")
    REDIS_DB: int = int(os.environ.get("REDIS_DB", "0"))

    # Cache
    CACHE_BACKEND: str = os.environ.get("CACHE_BACKEND", "memory")  # memory, redis
    CACHE_KEY_PREFIX: str = "cache:"
    CACHE_DEFAULT_TTL: int = 3600
    MEMORY_CACHE_MAX_SIZE: int = 10000
    PRODUCTS_CACHE_KEY: str = "PRODUCTS_CACHE_KEY"
    PRODUCTS_CACHE_TTL: int = 30 * 60  # absolute expiration, seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # text, json

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @validator("APP_ENV")
    def validate_app_env(cls, v: str) -> str:
        """Validate app environment."""
        allowed_envs = {"development", "testing", "staging", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of: {', '.join(sorted(allowed_envs))}")
        return v

    @validator("CACHE_BACKEND")
    def validate_cache_backend(cls, v: str) -> str:
        return v.lower()

    @model_validator(mode="after")
    def set_defaults_based_on_env(self) -> "Settings":
        """Set DEBUG and SEED_DATABASE based on APP_ENV."""
        if self.APP_ENV == "production":
            self.DEBUG = False
        if self.SEED_DATABASE is None:
            self.SEED_DATABASE = self.APP_ENV == "development"
        return self

    @property
    def fastapi_kwargs(self) -> Dict[str, Any]:
        """
        Get FastAPI configuration.

        Returns:
            Dictionary with FastAPI configuration
        """
        return {
            "title": self.PROJECT_NAME,
            "version": self.APP_VERSION,
            "description": self.PROJECT_DESCRIPTION,
            "docs_url": "/docs" if self.DEBUG else None,
            "redoc_url": "/redoc" if self.DEBUG else None,
            "openapi_url": "/openapi.json" if self.DEBUG else None,
        }

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.APP_ENV == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
