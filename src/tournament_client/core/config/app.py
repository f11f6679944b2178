"""
Application-wide settings.
"""
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines settings shared by every component: project name, environment and logging.

    Security Note:
        - APP_ENV controls cookie hardening; token cookies are only marked
          ``secure`` when it is set to ``production``.
    """
    PROJECT_NAME: str = "tournament-client"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"
