"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class PostgresSettings(BaseSettings):
    """PostgreSQL connection settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PG_", extra="ignore")

    host: str = "localhost"
    port: int = 5432
    user: str = "admin"
    password: str = "1234"
    database: str = "roommate_dev"
    pool_min: int = 2
    pool_max: int = 10
    auto_migrate: bool = True  # Apply schema DDL on startup

    @property
    def dsn(self) -> str:
        """Generate PostgreSQL DSN."""
        return (
            f"postgresql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class TelegramSettings(BaseSettings):
    """Telegram bot settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TELEGRAM_", extra="ignore")

    bot_token: str = ""


class MatchingSettings(BaseSettings):
    """Roommate matching settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MATCHING_", extra="ignore")

    candidate_limit: int = 50

    # Seconds
    request_timeout: float = 10.0
    notify_timeout: float = 5.0
    notify_retry_delay: float = 0.5  # Doubled after each failed attempt
    shutdown_grace: float = 5.0      # Wait for pending notifications on shutdown

    notify_max_retries: int = 3


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    jwt_secret: str = "change_me_in_production_roommate_jwt_secret"
    jwt_algorithm: str = "HS256"
    cors_origins: str = "*"  # Comma separated

    postgres: PostgresSettings = PostgresSettings()
    telegram: TelegramSettings = TelegramSettings()
    matching: MatchingSettings = MatchingSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
