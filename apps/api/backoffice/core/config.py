"""
Application configuration using Pydantic Settings.
"""
import logging
import sys
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Restaurant Back-Office API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 3001
    CORS_ORIGINS: List[str] = ["*"]

    # Built frontend bundle, served when present on disk
    FRONTEND_DIST: str = "dist"

    # Database: DATABASE_URL wins over the discrete DB_* variables
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: Optional[int] = None
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_SSL: bool = False

    # Connection pool
    DB_POOL_SIZE: int = 20
    DB_POOL_TIMEOUT: int = 2  # seconds to wait for a connection
    DB_POOL_RECYCLE: int = 30  # seconds before an idle connection is recycled

    # Restaurant
    RESTAURANT_TIMEZONE: str = "Europe/Madrid"
    RESERVATION_DAILY_CAPACITY: int = 10

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("RESERVATION_DAILY_CAPACITY")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("RESERVATION_DAILY_CAPACITY must be at least 1")
        return v

    @property
    def sqlalchemy_url(self) -> str:
        """
        Resolve the database URL.

        DATABASE_URL is used as-is (a legacy ``postgres://`` scheme is
        rewritten for SQLAlchemy). Otherwise the URL is assembled from the
        discrete DB_* variables.
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            return url

        return URL.create(
            "postgresql",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST or "localhost",
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from LOG_LEVEL (DEBUG wins when DEBUG is set)."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
