"""Bearer token authentication flow for httpx.

`BearerTokenAuth` is the request/response interceptor pair of the client:

- Before a request is sent, the stored access token (if any) is attached as
  ``Authorization: Bearer <token>``.
- When the response is a 401 to a request that carried a credential, the
  token is refreshed through the `RefreshCoordinator` and the request is
  replayed once with the new token.

Every send of a request carries an immutable `AuthAttempt` in
``request.extensions["auth_attempt"]``. Attempt 0 is the original send and
attempt 1 the only replay; a 401 on the replay is returned to the caller
unchanged.
"""

from typing import AsyncGenerator, Generator, Optional

import httpx
from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.core.logging import mask_token
from tournament_client.domain.interfaces import ITokenStorage
from tournament_client.domain.services.auth.refresh_coordinator import RefreshCoordinator
from tournament_client.domain.value_objects import AuthAttempt, TokenName

logger = get_logger(__name__)

AUTH_ATTEMPT_EXTENSION = "auth_attempt"
USER_AGENT_PATHS = ("/auth/login", "/auth/refresh")


def bearer(token: str) -> str:
    return f"Bearer {token}"


class BearerTokenAuth(httpx.Auth):
    """Attaches bearer tokens and recovers from expired access tokens.

    Only usable with ``httpx.AsyncClient``: the flow awaits token storage and
    the refresh coordinator.
    """

    def __init__(
        self,
        storage: ITokenStorage,
        coordinator: RefreshCoordinator,
        config: Optional[Settings] = None,
    ):
        self.storage = storage
        self.coordinator = coordinator
        self.config = config or default_settings

    def sync_auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("BearerTokenAuth requires httpx.AsyncClient")

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        # The body is replayed after a refresh, so it has to be buffered.
        await request.aread()

        attempt = AuthAttempt()
        token = await self.storage.get_token(TokenName.ACCESS)
        self._prepare(request, token, attempt)

        while True:
            response = yield request

            if response.status_code == 403:
                await self._log_forbidden(request, response)

            if response.status_code != 401:
                return

            sent_credential = request.headers.get("Authorization")
            if not sent_credential:
                # Anonymous caller hitting a protected endpoint, not an expired session.
                return
            if not attempt.can_retry:
                logger.info(
                    "unauthorized_after_retry",
                    url=str(request.url),
                    method=request.method,
                    attempt=attempt.number,
                )
                return

            token = await self._replacement_token(sent_credential)
            attempt = attempt.next()
            request = self._replay(request, token, attempt)

    async def _replacement_token(self, sent_credential: str) -> str:
        current = await self.storage.get_token(TokenName.ACCESS)
        if current and bearer(current) != sent_credential:
            # A refresh already completed after this request was sent.
            return current
        return await self.coordinator.get_fresh_token()

    def _prepare(self, request: httpx.Request, token: Optional[str], attempt: AuthAttempt) -> None:
        if token:
            request.headers["Authorization"] = bearer(token)
        if any(path in request.url.path for path in USER_AGENT_PATHS):
            request.headers["User-Agent"] = self.config.API_USER_AGENT
        request.extensions[AUTH_ATTEMPT_EXTENSION] = attempt

    def _replay(self, request: httpx.Request, token: str, attempt: AuthAttempt) -> httpx.Request:
        headers = request.headers.copy()
        headers["Authorization"] = bearer(token)
        return httpx.Request(
            request.method,
            request.url,
            headers=headers,
            content=request.content,
            extensions={**request.extensions, AUTH_ATTEMPT_EXTENSION: attempt},
        )

    async def _log_forbidden(self, request: httpx.Request, response: httpx.Response) -> None:
        await response.aread()
        try:
            data = response.json()
        except ValueError:
            data = response.text
        headers = dict(request.headers)
        if "authorization" in headers:
            headers["authorization"] = mask_token(headers["authorization"], visible=len("Bearer ") + 4)
        logger.error(
            "forbidden_response",
            url=str(request.url),
            method=request.method,
            headers=headers,
            data=data,
        )
