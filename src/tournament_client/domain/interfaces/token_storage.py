"""Token storage interface.

The token pair is the only shared mutable state in the client: every request
reads the access token, and only the refresh coordinator and the auth service
write or clear it. Implementations decide where the pair lives (process
memory, a cookie jar, Redis) but must honour the same contract.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tournament_client.domain.value_objects import TokenName, TokenPair


class ITokenStorage(ABC):
    """Interface for persisting the access/refresh token pair.

    Contract:
    - `get_token` returns None for a missing token, never an empty string.
    - `clear` removes both tokens, and calling it on an empty store is a no-op.
    """

    @abstractmethod
    async def get_token(self, name: TokenName) -> Optional[str]:
        """Returns the stored token, or None when it is absent."""
        raise NotImplementedError

    @abstractmethod
    async def set_token(self, name: TokenName, value: str) -> None:
        """Persists a single token."""
        raise NotImplementedError

    @abstractmethod
    async def remove_token(self, name: TokenName) -> None:
        """Removes a single token. Missing tokens are ignored."""
        raise NotImplementedError

    async def save_tokens(self, tokens: TokenPair) -> None:
        """Persists both halves of a freshly issued pair."""
        await self.set_token(TokenName.ACCESS, tokens.access_token)
        await self.set_token(TokenName.REFRESH, tokens.refresh_token)

    async def get_tokens(self) -> Optional[TokenPair]:
        """Returns the stored pair, or None unless both tokens are present."""
        access_token = await self.get_token(TokenName.ACCESS)
        refresh_token = await self.get_token(TokenName.REFRESH)
        if not access_token or not refresh_token:
            return None
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def clear(self) -> None:
        """Removes both tokens."""
        await self.remove_token(TokenName.ACCESS)
        await self.remove_token(TokenName.REFRESH)
