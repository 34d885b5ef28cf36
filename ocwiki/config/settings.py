"""
Application Settings

Centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.

Configuration Categories:
=========================
- Application: Basic app info (name, version, environment)
- Server: Host and port settings
- Admin Credentials: Single admin account checked at login
- Sessions: Cookie name, lifetime and storage backend
- Login Rate Limiting: Failed-attempt window and lockout
- CORS: Cross-origin resource sharing
- External Services: Redis

Environment Variables:
======================
Settings are loaded from environment variables or .env file.
Environment variables take precedence over .env file values.

Usage:
======
    from ocwiki.config.settings import settings

    rounds = settings.BCRYPT_ROUNDS
    is_dev = settings.is_development
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════════════════════

    APP_NAME: str = "OCWiki"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════════════════════════
    # SERVER
    # ═══════════════════════════════════════════════════════════════════════════════

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ═══════════════════════════════════════════════════════════════════════════════
    # ADMIN CREDENTIALS
    # ═══════════════════════════════════════════════════════════════════════════════

    ADMIN_USERNAME: str = Field(
        default="",
        description="Username of the admin account",
    )
    ADMIN_PASSWORD: str = Field(
        default="",
        description="Plain admin password (used only when no hash is configured)",
    )
    ADMIN_PASSWORD_HASH: str = Field(
        default="",
        description="Bcrypt hash of the admin password (preferred over ADMIN_PASSWORD)",
    )
    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=31,
        description="Bcrypt cost factor for new password hashes",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # SESSIONS
    # ═══════════════════════════════════════════════════════════════════════════════

    SESSION_COOKIE_NAME: str = "admin-session"
    SESSION_DURATION_SECONDS: int = Field(
        default=7 * 24 * 60 * 60,  # 7 days
        description="Lifetime of an admin session and its cookie",
    )
    SESSION_BACKEND: Literal["memory", "redis"] = Field(
        default="memory",
        description="Where session records are kept",
    )
    SESSION_CLEANUP_INTERVAL_SECONDS: int = Field(
        default=60 * 60,
        description="How often expired sessions are purged",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # LOGIN RATE LIMITING
    # ═══════════════════════════════════════════════════════════════════════════════

    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_WINDOW_SECONDS: int = 15 * 60
    LOGIN_LOCKOUT_SECONDS: int = 30 * 60

    # ═══════════════════════════════════════════════════════════════════════════════
    # CORS
    # ═══════════════════════════════════════════════════════════════════════════════

    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # EXTERNAL SERVICES - Redis
    # ═══════════════════════════════════════════════════════════════════════════════

    REDIS_URL: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL for session storage",
    )
    REDIS_SOCKET_TIMEOUT_SECONDS: float = Field(
        default=2.0,
        gt=0,
        description="Connect and read timeout for Redis commands",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # PROPERTIES
    # ═══════════════════════════════════════════════════════════════════════════════

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def admin_configured(self) -> bool:
        """True when a username and some form of password are set."""
        return bool(
            self.ADMIN_USERNAME.strip()
            and (self.ADMIN_PASSWORD_HASH.strip() or self.ADMIN_PASSWORD.strip())
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Global settings instance for convenient import
settings = get_settings()
