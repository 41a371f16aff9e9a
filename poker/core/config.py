"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Union
import os


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database
    DATABASE_URL: str = "sqlite:///./poker.db"
    DB_POOL_SIZE: int = 5  # Ignored for SQLite
    DB_MAX_OVERFLOW: int = 10

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]  # In production, specify your domain

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    # Application
    APP_TITLE: str = "Planning Poker"
    APP_DESCRIPTION: str = "Real-time collaborative estimation rooms"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_JSON: bool = False

    # Voting behaviour
    ALLOW_VOTES_AFTER_REVEAL: bool = True  # Stragglers may still overwrite after reveal
    STRICT_ESTIMATES: bool = False  # Reject values outside ESTIMATION_VALUES
    HIDE_UNREVEALED_VALUES: bool = False  # Blank values in GET /api/rooms/{id} until reveal

    # Rooms
    ROOM_CODE_MAX_ATTEMPTS: int = 20

    # Realtime
    SOCKETIO_PATH: str = "socket.io"

    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT != "production":
            return

        issues = []

        if self.CORS_ORIGINS == ["*"]:
            issues.append("CORS_ORIGINS should be restricted to specific domains")

        if self.is_sqlite():
            issues.append("DATABASE_URL should point at a server database, not SQLite")

        if issues:
            raise ValueError(
                "Production configuration errors:\n" +
                "\n".join(f"  - {issue}" for issue in issues)
            )


settings = Settings()

# Validate production configuration on startup
if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
