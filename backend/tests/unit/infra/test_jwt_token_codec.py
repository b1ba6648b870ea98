"""Unit tests for the PyJWT-backed token codec."""

from __future__ import annotations

import base64
import json
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from authsvc.infra.jwt import JWTTokenCodec
from authsvc.services._shared.errors import ConfigurationError, TokenInvalidError
from authsvc.services.auth.dto import AuthTokenConfig

ACCESS_SECRET = "unit-access-secret-0123456789abcdef"
REFRESH_SECRET = "unit-refresh-secret-0123456789abcdef"


def _config(**overrides) -> AuthTokenConfig:
    values = {
        "access_secret": ACCESS_SECRET,
        "refresh_secret": REFRESH_SECRET,
        "access_expiry": "15m",
        "refresh_expiry": "168h",
    }
    values.update(overrides)
    return AuthTokenConfig(**values)


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


@pytest.fixture
def codec(clock) -> JWTTokenCodec:
    return JWTTokenCodec(_config(), clock=clock)


class TestIssueAndVerify:
    def test_access_round_trip_returns_subject(self, codec):
        token = codec.issue_access(42)

        claims = codec.verify(token, expect_refresh=False)

        assert claims.user_id == 42

    def test_access_token_is_not_a_refresh_token(self, codec):
        token = codec.issue_access(42)

        with pytest.raises(TokenInvalidError):
            codec.verify(token, expect_refresh=True)

    def test_refresh_token_is_not_an_access_token(self, codec):
        token = codec.issue_refresh(7)

        with pytest.raises(TokenInvalidError):
            codec.verify(token, expect_refresh=False)

    def test_refresh_expiry_matches_configured_ttl(self, codec, clock):
        token = codec.issue_refresh(7)

        claims = codec.verify(token, expect_refresh=True)

        assert claims.user_id == 7
        expected = clock() + timedelta(hours=168)
        assert abs((claims.expiry - expected).total_seconds()) <= 1

    def test_claims_carry_integer_subject_and_type(self, codec):
        token = codec.issue_access(5)

        payload = jwt.decode(
            token,
            ACCESS_SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False, "verify_sub": False},
        )

        assert payload["sub"] == 5
        assert payload["type"] == "access"
        assert isinstance(payload["exp"], int)

    def test_tokens_minted_in_the_same_second_differ(self, codec):
        assert codec.issue_refresh(1) != codec.issue_refresh(1)


class TestExpiry:
    def test_access_token_expires_after_ttl(self, freeze_time):
        with freeze_time("2024-01-01 12:00:00") as frozen:
            codec = JWTTokenCodec(_config(access_expiry="15m"))
            token = codec.issue_access(1)

            frozen.tick(timedelta(minutes=16))

            with pytest.raises(TokenInvalidError) as exc_info:
                codec.verify(token, expect_refresh=False)

        assert str(exc_info.value) == "invalid or expired token"

    def test_token_valid_until_expiry_instant(self, codec, clock):
        token = codec.issue_access(1)

        clock.advance(minutes=14, seconds=59)
        assert codec.verify(token, expect_refresh=False).user_id == 1

        clock.advance(seconds=1)
        with pytest.raises(TokenInvalidError):
            codec.verify(token, expect_refresh=False)


class TestRejection:
    def test_wrong_secret(self, codec, clock):
        forged = jwt.encode(
            {"sub": 1, "exp": int((clock() + timedelta(minutes=5)).timestamp()), "type": "access"},
            "some-other-secret-0123456789abcdef",
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            codec.verify(forged, expect_refresh=False)

    def test_unsigned_token_is_refused(self, codec, clock):
        exp = int((clock() + timedelta(minutes=5)).timestamp())
        unsigned = ".".join(
            [
                _b64({"alg": "none", "typ": "JWT"}),
                _b64({"sub": 1, "exp": exp, "type": "access"}),
                "",
            ]
        )

        with pytest.raises(TokenInvalidError):
            codec.verify(unsigned, expect_refresh=False)

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_malformed_input(self, codec, garbage):
        with pytest.raises(TokenInvalidError):
            codec.verify(garbage, expect_refresh=False)

    def test_non_integer_subject(self, codec, clock):
        token = jwt.encode(
            {"sub": "42", "exp": int((clock() + timedelta(minutes=5)).timestamp()), "type": "access"},
            ACCESS_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            codec.verify(token, expect_refresh=False)

    def test_missing_expiry(self, codec):
        token = jwt.encode({"sub": 1, "type": "access"}, ACCESS_SECRET, algorithm="HS256")

        with pytest.raises(TokenInvalidError):
            codec.verify(token, expect_refresh=False)

    def test_type_tag_mismatch_with_right_secret(self, clock):
        """A token signed with the refresh secret but tagged ``access`` is refused."""
        token = jwt.encode(
            {"sub": 3, "exp": int((clock() + timedelta(hours=1)).timestamp()), "type": "access"},
            REFRESH_SECRET,
            algorithm="HS256",
        )
        strict = JWTTokenCodec(_config(), clock=clock)
        lenient = JWTTokenCodec(_config(), clock=clock, enforce_type=False)

        with pytest.raises(TokenInvalidError):
            strict.verify(token, expect_refresh=True)
        assert lenient.verify(token, expect_refresh=True).user_id == 3

    def test_failure_message_never_reveals_cause(self, codec, clock):
        expired = codec.issue_access(1)
        clock.advance(hours=1)
        messages = set()
        for token in (expired, "garbage", codec.issue_refresh(1)):
            with pytest.raises(TokenInvalidError) as exc_info:
                codec.verify(token, expect_refresh=False)
            messages.add(str(exc_info.value))

        assert messages == {"invalid or expired token"}


class TestConfiguration:
    @pytest.mark.parametrize("expiry", ["soon", "15", "", "0", "-5m"])
    def test_unusable_access_expiry(self, expiry):
        with pytest.raises(ConfigurationError):
            JWTTokenCodec(_config(access_expiry=expiry))

    @pytest.mark.parametrize("expiry", ["99999999999h", "100000000h"])
    def test_oversized_expiry_fails_at_construction(self, expiry):
        with pytest.raises(ConfigurationError):
            JWTTokenCodec(_config(refresh_expiry=expiry))

    def test_largest_expiry_still_issues(self, clock):
        codec = JWTTokenCodec(_config(refresh_expiry="2562047h"), clock=clock)

        claims = codec.verify(codec.issue_refresh(1), expect_refresh=True)

        assert claims.expiry > clock()

    def test_unusable_refresh_expiry(self):
        with pytest.raises(ConfigurationError):
            JWTTokenCodec(_config(refresh_expiry="a week"))

    def test_empty_secret(self):
        with pytest.raises(ConfigurationError):
            JWTTokenCodec(_config(access_secret=""))

    def test_ttls_are_exposed(self):
        codec = JWTTokenCodec(_config(access_expiry="1h30m", refresh_expiry="24h"))

        assert codec.access_ttl == timedelta(minutes=90)
        assert codec.refresh_ttl == timedelta(hours=24)

    def test_default_clock_is_utc_aware(self):
        codec = JWTTokenCodec(_config())
        claims = codec.verify(codec.issue_access(1), expect_refresh=False)

        assert claims.expiry.tzinfo is not None
        assert claims.expiry > datetime.now(UTC)
