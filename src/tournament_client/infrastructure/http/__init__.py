"""HTTP layer: the authenticated client and its bearer token flow."""

from .auth import AUTH_ATTEMPT_EXTENSION, BearerTokenAuth
from .client import ApiClient, parse_token_payload

__all__ = [
    "AUTH_ATTEMPT_EXTENSION",
    "ApiClient",
    "BearerTokenAuth",
    "parse_token_payload",
]
