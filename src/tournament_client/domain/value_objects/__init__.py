"""Value objects describing the client-side session."""

from .token_pair import (
    AuthAttempt,
    TokenName,
    TokenPair,
    get_jwt_exp,
    get_token_max_age,
    is_token_expired,
)

__all__ = [
    "AuthAttempt",
    "TokenName",
    "TokenPair",
    "get_jwt_exp",
    "get_token_max_age",
    "is_token_expired",
]
