"""Single-flight access token refresh.

When an access token expires, several requests usually discover it at the
same moment. Only the first of them refreshes the token pair; the others wait
for that outcome in a queue and are then released, either with the new access
token or with the refresh error.

State machine:
- IDLE: no refresh in flight. The next caller of `get_fresh_token` starts one.
- REFRESHING: a refresh is in flight. Callers are queued.

On success the new pair is persisted before the queue is drained. On failure
the stored pair is cleared and the user is sent to the login page (when a
redirector is configured) before the queue is rejected. In both cases the
queue is drained and the state returns to IDLE in one step with no await in
between, so a caller can never join a queue that has already been drained.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from structlog import get_logger

from tournament_client.core.config.settings import Settings, settings as default_settings
from tournament_client.core.exceptions import (
    MissingRefreshTokenError,
    RefreshWaitTimeoutError,
    TokenRefreshError,
)
from tournament_client.domain.interfaces import ILoginRedirector, ITokenStorage
from tournament_client.domain.value_objects import TokenName, TokenPair

logger = get_logger(__name__)

TokenRefresher = Callable[[str], Awaitable[TokenPair]]


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    """Coordinates access token refreshes for one client instance.

    The coordinator holds no global state: two clients (or two tests) never
    share a queue or a refresh.

    Attributes:
        storage (ITokenStorage): Where the token pair is read from and written to.
        redirector (ILoginRedirector | None): Sends the user to the login page
            when the session cannot be recovered. Headless callers pass None.
    """

    def __init__(
        self,
        storage: ITokenStorage,
        refresher: TokenRefresher,
        redirector: Optional[ILoginRedirector] = None,
        config: Optional[Settings] = None,
    ):
        self.storage = storage
        self.redirector = redirector
        self.config = config or default_settings
        self._refresher = refresher
        self._state = RefreshState.IDLE
        self._queue: List[asyncio.Future] = []

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_refreshing(self) -> bool:
        return self._state is RefreshState.REFRESHING

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    async def get_fresh_token(self) -> str:
        """Returns a freshly issued access token.

        Starts a refresh if none is in flight, otherwise waits for the one that
        is.

        Returns:
            str: The new access token.

        Raises:
            TokenRefreshError: If the refresh failed. The stored pair has been
                cleared by the time this is raised.
            RefreshWaitTimeoutError: If this caller was queued and
                ``API_REFRESH_WAIT_TIMEOUT`` elapsed first.
        """
        if self._state is RefreshState.REFRESHING:
            return await self._wait_for_refresh()
        return await self._refresh()

    async def _wait_for_refresh(self) -> str:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._queue.append(future)
        logger.debug("request_queued_for_refresh", pending=len(self._queue))

        timeout = self.config.API_REFRESH_WAIT_TIMEOUT
        try:
            if timeout is None:
                return await future
            return await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError:
            logger.warning("refresh_wait_timed_out", timeout=timeout)
            raise RefreshWaitTimeoutError() from None
        except TokenRefreshError as e:
            # One instance is shared by every waiter; each raise starts its own traceback.
            raise e.with_traceback(None)

    async def _refresh(self) -> str:
        self._state = RefreshState.REFRESHING
        logger.info("token_refresh_started")

        access_token: Optional[str] = None
        # Stays set if the refresh is cancelled, so that waiters are released.
        error: Optional[TokenRefreshError] = TokenRefreshError(
            "Token refresh was interrupted", code="token_refresh_interrupted"
        )
        try:
            access_token = await self._obtain_access_token()
            error = None
            return access_token
        except Exception as e:
            error = e if isinstance(e, TokenRefreshError) else TokenRefreshError(cause=e)
            logger.warning(
                "token_refresh_failed",
                error=str(e),
                code=error.code,
                pending=len(self._queue),
            )
            await self._end_session()
            if error is e:
                raise
            raise error from e
        finally:
            self._settle(access_token, error)

    async def _obtain_access_token(self) -> str:
        refresh_token = await self.storage.get_token(TokenName.REFRESH)
        if not refresh_token:
            raise MissingRefreshTokenError()

        tokens = await self._refresher(refresh_token)
        await self.storage.save_tokens(tokens)
        logger.info("token_refresh_succeeded", pending=len(self._queue))
        return tokens.access_token

    async def _end_session(self) -> None:
        try:
            await self.storage.clear()
        except Exception as e:
            logger.error("token_clear_failed", error=str(e))
        self._redirect_to_login()

    def _redirect_to_login(self) -> None:
        if self.redirector is None:
            return
        login_route = self.config.AUTH_LOGIN_ROUTE
        current_path = self.redirector.current_path()
        if current_path != login_route:
            self.redirector.remember_path(current_path)
        logger.info("redirecting_to_login", from_path=current_path, login_route=login_route)
        self.redirector.navigate(login_route)

    def _settle(self, access_token: Optional[str], error: Optional[BaseException]) -> None:
        queue, self._queue = self._queue, []
        self._state = RefreshState.IDLE
        for future in queue:
            # Waiters that timed out or were cancelled are already done.
            if future.done():
                continue
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(access_token)
