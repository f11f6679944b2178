"""Main client settings and configuration management.

This module composes the settings from the different modules (app, api, auth)
into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the client.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test when present
- Staging: Uses .env.staging when present
- Production: Uses .env.production when present
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .api import ApiSettings
from .app import AppSettings
from .auth import AuthSettings

logger = logging.getLogger(__name__)


class Settings(AppSettings, ApiSettings, AuthSettings):
    """The main settings class that aggregates all client configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Usage:
        - Access settings via the singleton instance `settings`, or build a
          dedicated instance (``Settings(NEXT_PUBLIC_API_URL=...)``) and pass
          it to the client explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        return Settings(_env_file=env_file)
    if Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
    else:
        logger.debug(f"No .env file found, using environment variables only (environment: {env})")
    return Settings()


# Create a singleton instance of the settings to be used across the client.
settings = create_settings()
