"""
MemoPad Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Database credentials follow the DB_HOST / DB_USER / DB_PASSWORD / DB_DATABASE
convention used by the deployment .env files. DATABASE_URL, when set, wins
over the composed URL (the test suite points it at SQLite).
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

DEFAULT_SESSION_SECRET = "change-me-session-secret"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Production deployments MUST override the database credentials and
    SESSION_SECRET.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Async driver name as understood by SQLAlchemy
    db_driver: str = Field(default="postgresql+asyncpg")
    db_host: str = Field(default="localhost")
    db_port: Optional[int] = Field(default=None, ge=1, le=65535)
    db_user: str = Field(default="memopad")
    db_password: str = Field(default="")
    db_database: str = Field(default="memopad")

    # Full URL override, e.g. sqlite+aiosqlite:///./dev.db
    database_url: Optional[str] = Field(default=None)

    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Run Base.metadata.create_all() at startup (dev convenience; use Alembic otherwise)
    db_create_tables: bool = Field(default=False)

    @property
    def sqlalchemy_url(self) -> str:
        """The async connection URL the engine is created with."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername=self.db_driver,
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host or None,
            port=self.db_port,
            database=self.db_database or None,
        )
        return url.render_as_string(hide_password=False)

    # ── Sessions ──────────────────────────────────────────────────────────
    # Signs the session handle carried in the cookie
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET)
    session_cookie_name: str = Field(default="memopad.sid")
    # Fixed lifetime from creation, no sliding renewal (24 hours)
    session_max_age: int = Field(default=86_400, ge=60, le=2_592_000)

    # ── Password hashing ──────────────────────────────────────────────────
    # bcrypt cost factor; 10 in production, tests lower it to 4
    bcrypt_rounds: int = Field(default=10, ge=4, le=15)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated; credentialed requests are allowed from these origins only
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3001, ge=1024, le=65535)

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
        "case_sensitive": False,  # DB_HOST and db_host both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that security-relevant settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if self.session_secret == DEFAULT_SESSION_SECRET:
            errors.append(
                "SESSION_SECRET is not set. Session cookies are signed with a public default."
            )
        if not self.database_url and not self.db_password:
            errors.append("DB_PASSWORD is not set.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
