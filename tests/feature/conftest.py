import httpx
import pytest
import pytest_asyncio

from tournament_client.domain.services.auth.auth_service import AuthService
from tournament_client.infrastructure.http.client import ApiClient
from tournament_client.infrastructure.navigation import SessionLoginRedirector
from tournament_client.infrastructure.token_storage import InMemoryTokenStorage

from tests.utils.tournament_backend import TournamentBackend


@pytest.fixture
def tournament_backend():
    return TournamentBackend()


@pytest.fixture
def session_storage():
    return {}


@pytest.fixture
def browser(test_settings, session_storage):
    return SessionLoginRedirector(
        current_path="/dashboard/tournaments/2", session_storage=session_storage, config=test_settings
    )


@pytest_asyncio.fixture
async def api(tournament_backend, browser, test_settings):
    transport = httpx.ASGITransport(app=tournament_backend.app)
    async with ApiClient(
        storage=InMemoryTokenStorage(), redirector=browser, config=test_settings, transport=transport
    ) as client:
        yield client


@pytest.fixture
def auth_service(api):
    return AuthService(api)
