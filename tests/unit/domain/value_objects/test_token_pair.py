import time

import jwt
import pytest
from pydantic import ValidationError

from tournament_client.domain.value_objects import (
    AuthAttempt,
    TokenName,
    TokenPair,
    get_jwt_exp,
    get_token_max_age,
    is_token_expired,
)


def make_jwt(exp_offset=None, **claims):
    if exp_offset is not None:
        claims["exp"] = int(time.time()) + exp_offset
    return jwt.encode({"sub": "42", **claims}, "signing-key-the-client-never-needs-to-know", algorithm="HS256")


class TestTokenPair:
    def test_parses_backend_payload(self):
        pair = TokenPair.model_validate({"accessToken": "a", "refreshToken": "r", "expiresIn": 900})

        assert pair.access_token == "a"
        assert pair.refresh_token == "r"
        assert pair.to_payload() == {"accessToken": "a", "refreshToken": "r"}

    def test_accepts_field_names(self):
        assert TokenPair(access_token="a", refresh_token="r") == TokenPair.model_validate(
            {"accessToken": "a", "refreshToken": "r"}
        )

    def test_rejects_empty_or_missing_tokens(self):
        with pytest.raises(ValidationError):
            TokenPair.model_validate({"accessToken": "", "refreshToken": "r"})
        with pytest.raises(ValidationError):
            TokenPair.model_validate({"accessToken": "a"})

    def test_is_immutable(self):
        pair = TokenPair(access_token="a", refresh_token="r")
        with pytest.raises(ValidationError):
            pair.access_token = "b"

    def test_token_names_match_cookie_names(self):
        assert TokenName.ACCESS.value == "accessToken"
        assert TokenName.REFRESH.value == "refreshToken"


class TestAuthAttempt:
    def test_original_send_may_be_retried_once(self):
        first = AuthAttempt()
        replay = first.next()

        assert first.number == 0
        assert not first.is_retry
        assert first.can_retry
        assert replay.number == 1
        assert replay.is_retry
        assert not replay.can_retry

    def test_next_returns_new_instance(self):
        first = AuthAttempt()
        first.next()

        assert first.number == 0


class TestJwtHelpers:
    def test_reads_exp_without_verifying_signature(self):
        token = make_jwt(exp_offset=600)

        assert get_jwt_exp(token) == jwt.decode(token, options={"verify_signature": False})["exp"]
        assert 590 <= get_token_max_age(token) <= 600

    def test_opaque_and_missing_tokens(self):
        assert get_jwt_exp(None) is None
        assert get_jwt_exp("opaque-refresh-token") is None
        assert get_jwt_exp(make_jwt()) is None
        assert get_token_max_age("opaque-refresh-token") is None

    def test_past_exp_has_no_max_age(self):
        assert get_token_max_age(make_jwt(exp_offset=-60)) is None

    @pytest.mark.parametrize(
        "token_factory,expected",
        [
            (lambda: None, True),
            (lambda: "", True),
            (lambda: "opaque", False),
            (lambda: make_jwt(exp_offset=-10), True),
            (lambda: make_jwt(exp_offset=10), True),
            (lambda: make_jwt(exp_offset=3600), False),
        ],
    )
    def test_is_token_expired(self, token_factory, expected):
        assert is_token_expired(token_factory(), skew_seconds=30) is expected
