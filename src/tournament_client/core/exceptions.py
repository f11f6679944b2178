from __future__ import annotations

"""Centralized, structured exception hierarchy for the tournament client.

Every exception carries a machine-readable `code` for programmatic error
handling and a human-readable `message` for logging and user feedback.

The hierarchy is designed to:
- Separate backend rejections (`ApiError`) from transport failures
  (`ApiConnectionError`) and session failures (`TokenRefreshError`).
- Map HTTP status codes onto specific subclasses so callers can catch
  `NotFoundError` instead of inspecting status codes.
- Carry the backend error envelope (`{success, error: {code, message, details}}`)
  so that UI layers can show the backend's own message.
"""

from typing import Any, Dict, Final, Optional

import httpx

__all__: Final = [
    "TournamentClientError",
    "ApiError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "ApiConnectionError",
    "TokenRefreshError",
    "MissingRefreshTokenError",
    "RefreshWaitTimeoutError",
    "raise_for_response",
    "get_error_message",
]


class TournamentClientError(Exception):
    """Base exception class for all custom errors in the tournament client.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Backend rejections
# ---------------------------------------------------------------------------


class ApiError(TournamentClientError):
    """Raised when the backend answers with a non-2xx status.

    Attributes:
        status_code (int): HTTP status of the response.
        details (dict): Field-level details from the error envelope, if any.
        response (httpx.Response | None): The raw response, for callers that
            need headers or the full body.
    """

    default_code: str = "api_error"

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(message, code or self.default_code)
        self.status_code = status_code
        self.details = details or {}
        self.response = response


class ValidationError(ApiError):
    """400 Bad Request or 422 Unprocessable Entity."""

    default_code = "validation_error"


class UnauthorizedError(ApiError):
    """401 Unauthorized that was not recovered by a token refresh.

    This is either an anonymous caller hitting a protected endpoint or a
    request that still failed after its single replay.
    """

    default_code = "unauthorized"


class ForbiddenError(ApiError):
    """403 Forbidden: the caller is authenticated but lacks permission."""

    default_code = "forbidden"


class NotFoundError(ApiError):
    """404 Not Found."""

    default_code = "not_found"


class ConflictError(ApiError):
    """409 Conflict, e.g. registering an email that already exists."""

    default_code = "conflict"


class ServerError(ApiError):
    """5xx responses."""

    default_code = "server_error"


# ---------------------------------------------------------------------------
# Transport and session errors
# ---------------------------------------------------------------------------


class ApiConnectionError(TournamentClientError):
    """Raised when the backend could not be reached or did not answer in time."""

    def __init__(self, message: str, code: str = "connection_error", cause: Optional[BaseException] = None):
        super().__init__(message, code)
        self.cause = cause


class TokenRefreshError(TournamentClientError):
    """Raised when the access token could not be refreshed.

    Every request that was waiting on the failed refresh receives the same
    instance. The local token pair has already been cleared when this is raised.
    """

    def __init__(
        self,
        message: str = "Session expired, please log in again",
        code: str = "token_refresh_failed",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, code)
        self.cause = cause


class MissingRefreshTokenError(TokenRefreshError):
    """Raised when a refresh is needed but no refresh token is stored."""

    def __init__(self, message: str = "No refresh token available", code: str = "missing_refresh_token"):
        super().__init__(message, code)


class RefreshWaitTimeoutError(TournamentClientError):
    """Raised for a queued request that gave up waiting on an in-flight refresh."""

    def __init__(self, message: str = "Timed out waiting for token refresh", code: str = "refresh_wait_timeout"):
        super().__init__(message, code)


_STATUS_ERRORS = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _error_envelope(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"]
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return {"message": body["message"]}
    return {}


def raise_for_response(response: httpx.Response) -> None:
    """Raise the matching `ApiError` subclass for a non-2xx response.

    Args:
        response: A response whose body has already been read.

    Raises:
        ApiError: Or one of its subclasses, populated from the error envelope.
    """
    if response.is_success:
        return

    envelope = _error_envelope(response)
    status = response.status_code
    if status >= 500:
        error_cls = ServerError
    else:
        error_cls = _STATUS_ERRORS.get(status, ApiError)

    message = envelope.get("message") or f"Request failed with status code {status}"
    details = envelope.get("details") if isinstance(envelope.get("details"), dict) else None
    raise error_cls(
        message,
        status_code=status,
        code=envelope.get("code"),
        details=details,
        response=response,
    )


def get_error_message(error: BaseException, fallback: str = "An error occurred") -> str:
    """Extract the most useful user-facing message from an exception.

    Validation details win over the envelope message, so that a form can show
    "Email is already taken" instead of a generic "Validation failed".
    """
    if isinstance(error, ApiError):
        for messages in error.details.values():
            if isinstance(messages, list) and messages:
                return str(messages[0])
            if isinstance(messages, str):
                return messages
        if error.message:
            return error.message
    return str(error) or fallback
