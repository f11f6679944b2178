"""
Redis-backed token storage.

Server-side callers (a backend-for-frontend, a bot, a worker serving many
users) cannot keep one cookie jar per user in memory. This storage keeps each
user's pair in Redis under a per-session key, with a TTL equal to the token
lifetime so that stale pairs disappear on their own.

**Security Note**: refresh tokens are stored in clear. Use a ``rediss://``
URL and restrict access to the Redis instance to trusted clients.
"""

from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.domain.interfaces import ITokenStorage
from tournament_client.domain.value_objects import TokenName
from tournament_client.infrastructure.token_storage.lifetime import token_max_age

logger = get_logger(__name__)


class RedisTokenStorage(ITokenStorage):
    """Stores one session's token pair in Redis.

    Attributes:
        redis_client (Redis): Async Redis client. Expected to be created with
            ``decode_responses=True``; raw bytes are decoded if it is not.
        session_id (str): Identifies whose tokens these are.
    """

    def __init__(self, redis_client: Redis, session_id: str, config: Optional[Settings] = None):
        self.redis_client = redis_client
        self.session_id = session_id
        self.config = config or default_settings

    @classmethod
    def from_url(cls, session_id: str, config: Optional[Settings] = None) -> "RedisTokenStorage":
        config = config or default_settings
        client = Redis.from_url(config.REDIS_URL, encoding="utf-8", decode_responses=True)
        return cls(client, session_id, config)

    def _key(self, name: TokenName) -> str:
        return f"{self.config.REDIS_TOKEN_PREFIX}:{self.session_id}:{name.value}"

    async def get_token(self, name: TokenName) -> Optional[str]:
        value = await self.redis_client.get(self._key(name))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value or None

    async def set_token(self, name: TokenName, value: str) -> None:
        ttl = token_max_age(name, value, self.config)
        await self.redis_client.setex(self._key(name), ttl, value)

    async def remove_token(self, name: TokenName) -> None:
        await self.redis_client.delete(self._key(name))

    async def clear(self) -> None:
        await self.redis_client.delete(self._key(TokenName.ACCESS), self._key(TokenName.REFRESH))
        logger.debug("redis_tokens_cleared", session_id=self.session_id)

    async def aclose(self) -> None:
        await self.redis_client.aclose()
