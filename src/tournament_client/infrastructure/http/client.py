"""
Authenticated HTTP client for the tournament backend.

`ApiClient` wraps an ``httpx.AsyncClient`` configured with the backend base
URL, the request timeout and JSON headers, and wires in the bearer token flow
with its refresh coordinator. The verb helpers return the decoded JSON body
and raise `ApiError` subclasses for non-2xx responses.

Example:
    async with ApiClient(storage=CookieTokenStorage()) as api:
        tournaments = await api.get("/tournaments", params={"page": 1})
"""

from typing import Any, Dict, Mapping, Optional

import httpx
from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.core.exceptions import ApiConnectionError, ApiError, raise_for_response
from tournament_client.domain.interfaces import ILoginRedirector, ITokenStorage
from tournament_client.domain.services.auth.refresh_coordinator import RefreshCoordinator
from tournament_client.domain.value_objects import TokenPair
from tournament_client.infrastructure.http.auth import BearerTokenAuth
from tournament_client.infrastructure.token_storage import InMemoryTokenStorage

logger = get_logger(__name__)


def parse_token_payload(body: Any) -> TokenPair:
    """Reads a token pair from either a bare payload or the ``{success, data}`` envelope."""
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        body = body["data"]
    return TokenPair.model_validate(body)


class ApiClient:
    """Async REST client with transparent access token refresh.

    Args:
        storage: Token storage shared with the auth service. Defaults to an
            in-memory store.
        redirector: Sends the user to the login page when the session cannot
            be recovered. None for headless use.
        config: Settings instance. Defaults to the module singleton.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` or
            ``httpx.ASGITransport`` in tests.
    """

    def __init__(
        self,
        storage: Optional[ITokenStorage] = None,
        redirector: Optional[ILoginRedirector] = None,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        self.storage = storage if storage is not None else InMemoryTokenStorage()
        self.redirector = redirector
        self.coordinator = RefreshCoordinator(
            self.storage, self._request_token_refresh, redirector, self.config
        )
        self.auth = BearerTokenAuth(self.storage, self.coordinator, self.config)
        self._client = httpx.AsyncClient(
            base_url=self.config.NEXT_PUBLIC_API_URL,
            timeout=self.config.request_timeout_seconds,
            headers={"Accept": "application/json"},
            auth=self.auth,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Sends a request through the auth flow and raises for non-2xx responses.

        Raises:
            ApiError: Or a subclass, for non-2xx responses.
            ApiConnectionError: If the backend could not be reached or timed out.
            TokenRefreshError: If the session expired and could not be refreshed.
        """
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise ApiConnectionError(f"Request to {url} timed out", code="timeout", cause=e) from e
        except httpx.TransportError as e:
            raise ApiConnectionError(f"Could not reach backend for {url}: {e}", cause=e) from e
        raise_for_response(response)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                "Backend returned a response that is not JSON",
                status_code=response.status_code,
                code="invalid_response",
                response=response,
            ) from e

    async def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._decode(await self.request("GET", url, params=params))

    async def post(self, url: str, data: Any = None) -> Any:
        return self._decode(await self.request("POST", url, json=data))

    async def put(self, url: str, data: Any = None) -> Any:
        return self._decode(await self.request("PUT", url, json=data))

    async def patch(self, url: str, data: Any = None) -> Any:
        return self._decode(await self.request("PATCH", url, json=data))

    async def delete(self, url: str) -> Any:
        return self._decode(await self.request("DELETE", url))

    async def upload(self, url: str, file: Any, data: Optional[Dict[str, str]] = None) -> Any:
        """Posts ``file`` as multipart form field ``file``, with ``data`` as extra form fields.

        ``file`` is anything httpx accepts as a file: a binary file object,
        bytes, or a ``(filename, content, content_type)`` tuple.
        """
        return self._decode(await self.request("POST", url, files={"file": file}, data=data))

    async def _request_token_refresh(self, refresh_token: str) -> TokenPair:
        # Sent without the bearer flow so that a 401 here cannot recurse.
        try:
            response = await self._client.post(
                self.config.refresh_url,
                json={"refreshToken": refresh_token},
                headers={"User-Agent": self.config.API_USER_AGENT},
                timeout=self.config.API_REFRESH_TIMEOUT,
                auth=None,
            )
        except httpx.TimeoutException as e:
            raise ApiConnectionError("Token refresh timed out", code="timeout", cause=e) from e
        except httpx.TransportError as e:
            raise ApiConnectionError(f"Could not reach backend for token refresh: {e}", cause=e) from e
        raise_for_response(response)
        return parse_token_payload(response.json())
