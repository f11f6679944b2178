"""Token value objects for the client side of the session.

The client never verifies token signatures: the backend is the only authority
on validity. The ``exp`` claim is read only to size cookie lifetimes and to
answer "is this token obviously stale" before a request is made.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TokenName(str, Enum):
    """Names under which the two halves of the pair are persisted."""

    ACCESS = "accessToken"
    REFRESH = "refreshToken"


class TokenPair(BaseModel):
    """Access & refresh tokens as issued by the backend.

    Parses the backend's camelCase payload (``accessToken``/``refreshToken``)
    and also accepts the snake_case field names.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel, extra="ignore"
    )

    access_token: str = Field(min_length=1)
    refresh_token: str = Field(min_length=1)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class AuthAttempt:
    """How many times a single request has been sent through the auth flow.

    Attempt 0 is the original send; attempt 1 is the only replay allowed after
    a 401. A 401 on any replay is final.
    """

    number: int = 0

    MAX_REPLAYS = 1

    @property
    def is_retry(self) -> bool:
        return self.number > 0

    @property
    def can_retry(self) -> bool:
        return self.number < self.MAX_REPLAYS

    def next(self) -> "AuthAttempt":
        return AuthAttempt(self.number + 1)


def get_jwt_exp(token: Optional[str]) -> Optional[int]:
    """Return the ``exp`` claim of a JWT, or None if absent or unparseable."""
    if not token:
        return None
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    exp = claims.get("exp")
    return exp if isinstance(exp, int) else None


def get_token_max_age(token: Optional[str]) -> Optional[int]:
    """Seconds until the token expires, or None if it has no future ``exp``."""
    exp = get_jwt_exp(token)
    if exp is None:
        return None
    max_age = exp - int(time.time())
    return max_age if max_age > 0 else None


def is_token_expired(token: Optional[str], skew_seconds: int = 30) -> bool:
    """Check whether a token is missing or expires within ``skew_seconds``.

    Opaque tokens (no readable ``exp``) are treated as not expired; the
    backend will say otherwise with a 401.
    """
    if not token:
        return True
    exp = get_jwt_exp(token)
    if exp is None:
        return False
    return exp - skew_seconds <= int(time.time())
