"""
Backend API connection settings.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """
    Defines how the client reaches the tournament backend.

    The ``NEXT_PUBLIC_*`` names are shared with the web front end so that both
    can be pointed at the same backend from a single ``.env`` file.

    Performance Note:
        - API_REFRESH_TIMEOUT is deliberately shorter than the request timeout
          so that a hung refresh endpoint cannot hold queued requests for the
          full request timeout.
    """
    NEXT_PUBLIC_API_URL: str = "http://localhost:3010/api/v1"
    NEXT_PUBLIC_API_TIMEOUT: int = Field(default=30000, ge=1)  # milliseconds

    API_REFRESH_PATH: str = "/auth/refresh-token"
    API_REFRESH_TIMEOUT: float = Field(default=5.0, gt=0)  # seconds
    API_REFRESH_WAIT_TIMEOUT: Optional[float] = None  # seconds, None waits for the refresh outcome
    API_USER_AGENT: str = "Football-Tournament-Frontend"

    @field_validator("NEXT_PUBLIC_API_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """
        Removes a trailing slash so that paths can always be joined with ``/``.

        Args:
            v: Configured base URL.

        Returns:
            The base URL without a trailing slash.
        """
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def request_timeout_seconds(self) -> float:
        return self.NEXT_PUBLIC_API_TIMEOUT / 1000

    @property
    def refresh_url(self) -> str:
        return f"{self.NEXT_PUBLIC_API_URL}{self.API_REFRESH_PATH}"
