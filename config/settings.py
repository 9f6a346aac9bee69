"""
Central configuration using Pydantic BaseSettings.

Validates all env vars at startup (fail-fast). The token-signing secret and
the password pepper are required: there is no default and no testing-mode
bypass, so a process without them never serves traffic.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    print(settings.auth.jwt_expiration_hours)

Lazy initialization: get_settings() creates the singleton on first call.
Tests can reset via get_settings.cache_clear().
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings

_SQLITE_PREFIX = "sqlite:///"


# =============================================================================
# Nested Settings Groups
# =============================================================================


class AuthSettings(BaseSettings):
    """JWT, password hashing and bootstrap account configuration."""

    model_config = {"env_prefix": "", "extra": "ignore", "frozen": True}

    jwt_secret: SecretStr = SecretStr("")
    password_pepper: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24

    # werkzeug method string, e.g. "scrypt" or "pbkdf2:sha256:600000"
    password_hash_method: str = "scrypt"

    # Optional first admin account, created only if the username is free
    admin_username: Optional[str] = None
    admin_password: Optional[SecretStr] = None


class DatabaseSettings(BaseSettings):
    """Database configuration."""

    model_config = {"env_prefix": "", "extra": "ignore", "frozen": True}

    database_url: str = "sqlite:///data/bugtrack.db"

    @property
    def sqlite_path(self) -> Path:
        """Filesystem path of the SQLite database named by DATABASE_URL."""
        if not self.database_url.startswith(_SQLITE_PREFIX):
            raise ValueError(
                f"Unsupported DATABASE_URL scheme (expected {_SQLITE_PREFIX}<path>)"
            )
        return Path(self.database_url[len(_SQLITE_PREFIX):])


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration."""

    model_config = {"env_prefix": "RATE_LIMIT_", "extra": "ignore", "frozen": True}

    enabled: bool = True
    default: str = "500 per minute"
    auth: str = "10 per minute"
    storage: str = "memory://"


# =============================================================================
# Root Settings
# =============================================================================


class AppSettings(BaseSettings):
    """Root application settings composing all sub-settings."""

    model_config = {"env_prefix": "", "extra": "ignore", "frozen": True}

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: str = ""

    # Server
    cors_origins: str = "http://localhost:3000"
    host: str = "127.0.0.1"
    port: int = 8080

    # Nested groups (initialized separately to support env_prefix)
    auth: AuthSettings = None  # type: ignore[assignment]
    database: DatabaseSettings = None  # type: ignore[assignment]
    rate_limit: RateLimitSettings = None  # type: ignore[assignment]

    @model_validator(mode="before")
    @classmethod
    def _init_nested(cls, values):
        """Initialize nested settings from environment."""
        if values.get("auth") is None:
            values["auth"] = AuthSettings()
        if values.get("database") is None:
            values["database"] = DatabaseSettings()
        if values.get("rate_limit") is None:
            values["rate_limit"] = RateLimitSettings()
        return values

    @model_validator(mode="after")
    def _validate_required_secrets(self):
        """Refuse to start without the signing secret and the pepper."""
        hint = "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""

        if not self.auth.jwt_secret.get_secret_value().strip():
            raise ValueError(f"JWT_SECRET env var is required. {hint}")

        if not self.auth.password_pepper.get_secret_value().strip():
            raise ValueError(f"PASSWORD_PEPPER env var is required. {hint}")

        if len(self.auth.jwt_secret.get_secret_value().encode("utf-8")) < 32:
            raise ValueError(f"JWT_SECRET must be at least 32 bytes. {hint}")

        if self.auth.jwt_secret.get_secret_value() == self.auth.password_pepper.get_secret_value():
            raise ValueError("JWT_SECRET and PASSWORD_PEPPER must be different values")

        if self.auth.jwt_expiration_hours <= 0:
            raise ValueError("JWT_EXPIRATION_HOURS must be positive")

        return self

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """
    Get the application settings singleton.

    Lazy-initialized on first call. Validates all env vars (fail-fast).
    Tests can reset via: get_settings.cache_clear()
    """
    return AppSettings()
