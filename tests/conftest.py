import httpx
import pytest

from tournament_client.core.config.settings import Settings
from tournament_client.infrastructure.http.client import ApiClient
from tournament_client.infrastructure.navigation import SessionLoginRedirector
from tournament_client.infrastructure.token_storage import InMemoryTokenStorage

from tests.utils.fake_backend import FakeBackend

API_URL = "http://api.test/api/v1"


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment."""
    return Settings(
        NEXT_PUBLIC_API_URL=API_URL,
        NEXT_PUBLIC_API_TIMEOUT=30000,
        API_REFRESH_TIMEOUT=5.0,
        API_REFRESH_WAIT_TIMEOUT=None,
        APP_ENV="test",
        TOKEN_COOKIE_FILE=None,
    )


@pytest.fixture
def storage():
    """Token storage holding an expired access token and a valid refresh token."""
    return InMemoryTokenStorage(access_token="expired", refresh_token="valid-1")


@pytest.fixture
def redirector(test_settings):
    return SessionLoginRedirector(current_path="/dashboard/tournaments", config=test_settings)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def make_client(test_settings, storage, redirector):
    """Builds an ApiClient wired to a MockTransport around ``handler``."""

    def _make(handler, **kwargs) -> ApiClient:
        options = {"storage": storage, "redirector": redirector, "config": test_settings}
        options.update(kwargs)
        return ApiClient(transport=httpx.MockTransport(handler), **options)

    return _make
