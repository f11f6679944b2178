from __future__ import annotations

"""Response models for the backend authentication endpoints."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tournament_client.domain.value_objects import TokenPair

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """The backend's success envelope: ``{success, data, message}``."""

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None


class UserOut(BaseModel):
    """User as returned by ``/auth/me``, login and register."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    is_email_verified: Optional[bool] = None


class AuthPayload(BaseModel):
    """Data returned by register & login: a token pair plus the user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    access_token: str
    refresh_token: str
    user: Optional[UserOut] = None

    @property
    def tokens(self) -> TokenPair:
        return TokenPair(access_token=self.access_token, refresh_token=self.refresh_token)
