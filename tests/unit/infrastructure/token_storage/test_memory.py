import pytest

from tournament_client.domain.value_objects import TokenName, TokenPair
from tournament_client.infrastructure.token_storage import InMemoryTokenStorage


@pytest.mark.asyncio
async def test_save_and_read_pair():
    storage = InMemoryTokenStorage()

    await storage.save_tokens(TokenPair(access_token="a", refresh_token="r"))

    assert await storage.get_token(TokenName.ACCESS) == "a"
    assert await storage.get_token(TokenName.REFRESH) == "r"
    assert await storage.get_tokens() == TokenPair(access_token="a", refresh_token="r")


@pytest.mark.asyncio
async def test_pair_requires_both_tokens():
    storage = InMemoryTokenStorage(refresh_token="r")

    assert await storage.get_token(TokenName.ACCESS) is None
    assert await storage.get_tokens() is None


@pytest.mark.asyncio
async def test_clear_is_idempotent():
    storage = InMemoryTokenStorage(access_token="a", refresh_token="r")

    await storage.clear()
    await storage.clear()

    assert await storage.get_token(TokenName.ACCESS) is None
    assert await storage.get_token(TokenName.REFRESH) is None
