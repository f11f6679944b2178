"""Authentication and token storage settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """Defines settings for token persistence and the login redirect.

    Token lifetimes are only defaults: when a token is a JWT carrying an
    ``exp`` claim in the future, the remaining lifetime of the token wins.

    Security Note:
        - TOKEN_COOKIE_FILE holds live credentials; it should be readable only
          by the user running the client (chmod 600).
        - REDIS_URL should use ``rediss://`` when the Redis instance is not on
          a trusted network, since refresh tokens are stored there in clear.
    """

    AUTH_LOGIN_ROUTE: str = "/auth/login"
    AUTH_REDIRECT_SESSION_KEY: str = "redirectAfterLogin"

    ACCESS_TOKEN_DEFAULT_MAX_AGE: int = Field(default=60 * 15, ge=1)  # 15 minutes
    REFRESH_TOKEN_DEFAULT_MAX_AGE: int = Field(default=60 * 60 * 24 * 7, ge=1)  # 7 days
    TOKEN_EXPIRY_SKEW_SECONDS: int = Field(default=30, ge=0)

    TOKEN_COOKIE_FILE: Optional[str] = None
    TOKEN_COOKIE_DOMAIN: str = "localhost"
    TOKEN_COOKIE_PATH: str = "/"
    TOKEN_COOKIE_SAMESITE: str = "lax"

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_TOKEN_PREFIX: str = "tournament-client:tokens"
