"""Authentication service for the tournament backend.

Wraps the ``/auth`` endpoints and keeps the token storage in step with them:
login and register persist the issued pair, and logout always clears it,
even when the backend cannot be reached.
"""

from typing import Any, Mapping, Optional, Union

from structlog import get_logger

from tournament_client.adapters.api.v1.auth.schemas import (
    ApiResponse,
    AuthPayload,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserOut,
    VerifyEmailRequest,
)
from tournament_client.core.exceptions import TournamentClientError
from tournament_client.domain.interfaces import ILoginRedirector, ITokenStorage
from tournament_client.domain.value_objects import TokenName, TokenPair, is_token_expired
from tournament_client.infrastructure.http.auth import bearer
from tournament_client.infrastructure.http.client import ApiClient, parse_token_payload

logger = get_logger(__name__)

AUTH_BASE = "/auth"


def _payload(data: Any, model: type) -> dict:
    if not isinstance(data, model):
        data = model.model_validate(data)
    return data.to_payload()


class AuthService:
    """Session lifecycle operations against the backend.

    Attributes:
        client (ApiClient): Client used for every call.
        storage (ITokenStorage): Token storage; the client's own by default so
            that the bearer flow sees tokens written here.
        redirector (ILoginRedirector | None): Source of the post-login return path.
    """

    def __init__(
        self,
        client: ApiClient,
        storage: Optional[ITokenStorage] = None,
        redirector: Optional[ILoginRedirector] = None,
    ):
        self.client = client
        self.storage = storage if storage is not None else client.storage
        self.redirector = redirector if redirector is not None else client.redirector

    async def register(self, data: Union[RegisterRequest, Mapping[str, Any]]) -> ApiResponse[AuthPayload]:
        """Registers a new user and stores the issued tokens on success."""
        body = await self.client.post(f"{AUTH_BASE}/register", _payload(data, RegisterRequest))
        return await self._store_auth_response(body)

    async def login(self, data: Union[LoginRequest, Mapping[str, Any]]) -> ApiResponse[AuthPayload]:
        """Logs in with email and password and stores the issued tokens on success."""
        body = await self.client.post(f"{AUTH_BASE}/login", _payload(data, LoginRequest))
        return await self._store_auth_response(body)

    async def _store_auth_response(self, body: Any) -> ApiResponse[AuthPayload]:
        response = ApiResponse[AuthPayload].model_validate(body)
        if response.success and response.data:
            await self.storage.save_tokens(response.data.tokens)
        return response

    async def logout(self) -> None:
        """Invalidates the refresh token on the backend and clears local tokens.

        Never raises for backend or network failures, and is safe to call when
        already logged out. The call bypasses the refresh flow: a 401 here
        ends the session like any other failure, without a login redirect.
        """
        try:
            refresh_token = await self.storage.get_token(TokenName.REFRESH)
            if refresh_token:
                access_token = await self.storage.get_token(TokenName.ACCESS)
                await self.client.request(
                    "POST",
                    f"{AUTH_BASE}/logout",
                    json={"refreshToken": refresh_token},
                    headers={"Authorization": bearer(access_token)} if access_token else None,
                    auth=None,
                )
        except TournamentClientError as e:
            logger.warning("logout_request_failed", error=str(e), code=e.code)
        finally:
            await self.storage.clear()

    async def get_current_user(self) -> ApiResponse[UserOut]:
        body = await self.client.post(f"{AUTH_BASE}/me")
        return ApiResponse[UserOut].model_validate(body)

    async def verify_email(self, data: Union[VerifyEmailRequest, Mapping[str, Any]]) -> ApiResponse[Any]:
        body = await self.client.post(f"{AUTH_BASE}/verify-email", _payload(data, VerifyEmailRequest))
        return ApiResponse[Any].model_validate(body)

    async def forgot_password(self, data: Union[ForgotPasswordRequest, Mapping[str, Any]]) -> ApiResponse[Any]:
        body = await self.client.post(f"{AUTH_BASE}/forgot-password", _payload(data, ForgotPasswordRequest))
        return ApiResponse[Any].model_validate(body)

    async def reset_password(self, data: Union[ResetPasswordRequest, Mapping[str, Any]]) -> ApiResponse[Any]:
        body = await self.client.post(f"{AUTH_BASE}/reset-password", _payload(data, ResetPasswordRequest))
        return ApiResponse[Any].model_validate(body)

    async def change_password(self, data: Union[ChangePasswordRequest, Mapping[str, Any]]) -> ApiResponse[Any]:
        body = await self.client.post(f"{AUTH_BASE}/change-password", _payload(data, ChangePasswordRequest))
        return ApiResponse[Any].model_validate(body)

    async def refresh_token(self, token: str) -> TokenPair:
        """Exchanges ``token`` for a new pair without touching storage.

        Token refresh for ordinary requests happens automatically in the
        client; this is for callers that manage a pair themselves.
        """
        body = await self.client.post(f"{AUTH_BASE}/refresh-token", {"refreshToken": token})
        return parse_token_payload(body)

    async def is_authenticated(self) -> bool:
        return bool(await self.storage.get_token(TokenName.ACCESS))

    async def get_tokens(self) -> Optional[TokenPair]:
        return await self.storage.get_tokens()

    async def is_access_token_expired(self) -> bool:
        """True when the stored access token is missing or expires within the configured skew.

        Opaque tokens count as valid until the backend rejects them.
        """
        token = await self.storage.get_token(TokenName.ACCESS)
        return is_token_expired(token, self.client.config.TOKEN_EXPIRY_SKEW_SECONDS)

    def consume_redirect_path(self, default: str = "/") -> str:
        """Returns where to send the user after login, forgetting the stored path."""
        if self.redirector is None:
            return default
        return self.redirector.consume_remembered_path() or default
