"""Async client for the football tournament backend.

The public entry points are re-exported here:

- `ApiClient`: authenticated REST client with single-flight token refresh.
- `AuthService`: login, register, logout and the other ``/auth`` calls.
- Token storages: `InMemoryTokenStorage`, `CookieTokenStorage`, `RedisTokenStorage`.
- `SessionLoginRedirector`: remembers the pre-login path and records navigation.
"""

from tournament_client.core.config.settings import Settings, settings
from tournament_client.core.exceptions import (
    ApiConnectionError,
    ApiError,
    TokenRefreshError,
    TournamentClientError,
)
from tournament_client.domain.services.auth.auth_service import AuthService
from tournament_client.domain.value_objects import TokenPair
from tournament_client.infrastructure.http import ApiClient
from tournament_client.infrastructure.navigation import SessionLoginRedirector
from tournament_client.infrastructure.token_storage import (
    CookieTokenStorage,
    InMemoryTokenStorage,
    RedisTokenStorage,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiConnectionError",
    "ApiError",
    "AuthService",
    "CookieTokenStorage",
    "InMemoryTokenStorage",
    "RedisTokenStorage",
    "SessionLoginRedirector",
    "Settings",
    "TokenPair",
    "TokenRefreshError",
    "TournamentClientError",
    "settings",
]
