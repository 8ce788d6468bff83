"""
PartCat Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments should override DATABASE_URL, STORAGE_ROOT and
    the bootstrap account credentials.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path to file>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./partcat.db",
        description="Async SQLAlchemy connection URL",
    )

    # Validates pooled connections before use
    db_pool_pre_ping: bool = Field(default=True)

    # ── Image Storage ─────────────────────────────────────────────────────
    # Relative image paths are resolved against this directory
    storage_root: str = Field(default="./storage")

    # ── Users & Authentication ────────────────────────────────────────────
    # Permission level assigned to every account created through POST /user/new
    default_permission_level: int = Field(default=1, ge=0)

    # bcrypt cost factor: each +1 doubles hashing time
    bcrypt_rounds: int = Field(default=12, ge=4, le=16)

    # Optional account created at startup so a fresh database is reachable.
    # Every user route requires authentication, including user creation.
    admin_email: str = Field(default="")
    admin_password: str = Field(default="")
    admin_permission_level: int = Field(default=10, ge=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by the property below)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that related settings are configured together.
        When:  Called during app startup (lifespan).
        How:   Checks each rule and raises ValueError with guidance.
        """
        errors = []
        if self.admin_email and not self.admin_password:
            errors.append(
                "ADMIN_EMAIL is set but ADMIN_PASSWORD is empty. "
                "Set both to create the bootstrap account, or neither to skip it."
            )
        if self.admin_password and not self.admin_email:
            errors.append("ADMIN_PASSWORD is set but ADMIN_EMAIL is empty.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
