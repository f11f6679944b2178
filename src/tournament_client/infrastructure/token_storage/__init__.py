"""Token storage backends."""

from .cookie import CookieTokenStorage
from .memory import InMemoryTokenStorage
from .redis_storage import RedisTokenStorage

__all__ = [
    "CookieTokenStorage",
    "InMemoryTokenStorage",
    "RedisTokenStorage",
]
