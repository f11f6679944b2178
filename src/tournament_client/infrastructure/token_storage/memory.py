from typing import Dict, Optional

from tournament_client.domain.interfaces import ITokenStorage
from tournament_client.domain.value_objects import TokenName


class InMemoryTokenStorage(ITokenStorage):
    """Keeps the token pair in process memory.

    Nothing survives a restart; suited to scripts, workers and tests.
    """

    def __init__(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        self._tokens: Dict[TokenName, str] = {}
        if access_token:
            self._tokens[TokenName.ACCESS] = access_token
        if refresh_token:
            self._tokens[TokenName.REFRESH] = refresh_token

    async def get_token(self, name: TokenName) -> Optional[str]:
        return self._tokens.get(name) or None

    async def set_token(self, name: TokenName, value: str) -> None:
        self._tokens[name] = value

    async def remove_token(self, name: TokenName) -> None:
        self._tokens.pop(name, None)
