"""Session services: token refresh coordination and the auth endpoints."""

from .refresh_coordinator import RefreshCoordinator, RefreshState, TokenRefresher

__all__ = [
    "RefreshCoordinator",
    "RefreshState",
    "TokenRefresher",
]
