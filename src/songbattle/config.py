"""
Configuration management for SongBattle.

Uses Pydantic Settings to load configuration from environment variables
with sensible defaults for development. Secrets (session signing key,
database URLs) should be set via environment variables or .env file.

Usage:
    from songbattle.config import settings
    print(settings.database_url)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ==========================================================================
    # Database Configuration
    # ==========================================================================

    database_url: str = Field(
        default="sqlite:///songbattle.db",
        description="SQLAlchemy connection URL (SQLite for dev, PostgreSQL in production)",
    )

    # Pool settings are ignored by SQLite
    db_pool_size: int = Field(
        default=5,
        description="Number of connections to keep in the pool",
    )
    db_max_overflow: int = Field(
        default=10,
        description="Max additional connections beyond pool_size",
    )

    sqlite_busy_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="How long a SQLite transaction waits for another writer to commit",
    )

    # ==========================================================================
    # Rating Configuration
    # ==========================================================================

    default_rating: int = Field(
        default=1500,
        description="Rating given to a song that has never been contested",
    )
    k_factor: int = Field(
        default=32,
        gt=0,
        description="Max rating movement per comparison",
    )

    # ==========================================================================
    # Matchmaking Configuration
    # ==========================================================================

    wildcard_probability: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Chance of a fully random pairing that ignores ratings",
    )
    rating_window: int = Field(
        default=150,
        ge=0,
        description="Max rating gap for a competitive opponent",
    )
    wide_rating_window: int = Field(
        default=300,
        ge=0,
        description="Fallback rating gap when no opponent is within rating_window",
    )
    recency_capacity: int = Field(
        default=10,
        ge=0,
        description="Number of recent pairs remembered per session",
    )

    # ==========================================================================
    # Session Configuration
    # ==========================================================================

    session_secret: str = Field(
        default="songbattle-dev-session-secret-change-me",
        description="Secret key used to sign listener session cookies",
    )
    session_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 30,
        description="Listener session cookie lifetime in seconds",
    )

    # ==========================================================================
    # API Configuration
    # ==========================================================================

    api_host: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to",
    )
    api_port: int = Field(
        default=3000,
        description="Port for the API server",
    )
    api_reload: bool = Field(
        default=False,
        description="Enable auto-reload for development",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="console",
        description="Log format: 'json' for production, 'console' for dev",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once,
    which is important because loading from .env can be slow.
    """
    return Settings()


# Convenience alias for importing
settings = get_settings()
