"""
Unit tests for password hashing and access tokens.

Tests:
- Password hashing and verification
- Token issuance and claim contents
- Token expiry boundaries
- Tampered and foreign tokens
"""

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from jobtracker.core.errors import (
    AuthError,
    TokenConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from jobtracker.core.security import TokenService, hash_password, verify_password

SECRET = "unit-test-secret"
ISSUED_AT = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _b64url(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


class FakeClock:
    """Settable clock for driving token expiry"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(ISSUED_AT)


@pytest.fixture
def service(clock):
    return TokenService(SECRET, clock=clock)


class TestPasswordHashing:
    """Tests for the credential hasher"""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("pw1")
        assert hashed != "pw1"
        assert hashed.startswith("$2")

    def test_hash_uses_cost_factor_10(self):
        assert hash_password("pw1").split("$")[2] == "10"

    def test_verify_correct_password(self):
        assert verify_password("pw1", hash_password("pw1"))

    def test_verify_wrong_password(self):
        assert not verify_password("pw2", hash_password("pw1"))

    def test_same_password_gets_different_salts(self):
        first = hash_password("same")
        second = hash_password("same")
        assert first != second
        assert verify_password("same", first)
        assert verify_password("same", second)

    def test_long_password_truncated_to_72_bytes(self):
        long_password = "a" * 100
        hashed = hash_password(long_password)
        assert verify_password(long_password, hashed)
        assert verify_password("a" * 72, hashed)

    def test_empty_password_is_accepted(self):
        assert verify_password("", hash_password(""))

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("pw1", "not-a-bcrypt-hash") is False


class TestTokenIssue:
    """Tests for token issuance"""

    def test_token_embeds_id_and_one_hour_expiry(self, service):
        token = service.issue(42)
        payload = jwt.get_unverified_claims(token)

        assert payload["id"] == 42
        assert payload["exp"] - payload["iat"] == 3600
        assert payload["exp"] == int((ISSUED_AT + timedelta(hours=1)).timestamp())

    def test_sub_second_clock_keeps_exact_lifetime(self, clock):
        clock.now = ISSUED_AT.replace(microsecond=700000)
        service = TokenService(SECRET, clock=clock)

        token = service.issue(42)
        payload = jwt.get_unverified_claims(token)

        assert payload["iat"] == int(ISSUED_AT.timestamp())
        assert payload["exp"] - payload["iat"] == 3600

        clock.now = ISSUED_AT + timedelta(hours=1)
        assert service.verify(token).id == 42
        clock.advance(seconds=1)
        with pytest.raises(TokenExpiredError):
            service.verify(token)

    def test_verify_returns_claim(self, service):
        claim = service.verify(service.issue(7))

        assert claim.id == 7
        assert claim.expires_at == ISSUED_AT + timedelta(hours=1)

    def test_issue_without_secret_fails_loudly(self):
        with pytest.raises(TokenConfigurationError):
            TokenService("").issue(1)

    def test_verify_without_secret_rejects(self, service):
        token = service.issue(1)
        with pytest.raises(TokenInvalidError):
            TokenService("").verify(token)


class TestTokenExpiry:
    """Tests for the one hour lifetime"""

    def test_valid_just_before_one_hour(self, service, clock):
        token = service.issue(1)
        clock.advance(minutes=59, seconds=59)
        assert service.verify(token).id == 1

    def test_valid_at_exactly_one_hour(self, service, clock):
        token = service.issue(1)
        clock.advance(hours=1)
        assert service.verify(token).id == 1

    def test_expired_strictly_after_one_hour(self, service, clock):
        token = service.issue(1)
        clock.advance(hours=1, seconds=1)
        with pytest.raises(TokenExpiredError):
            service.verify(token)

    def test_expired_is_an_auth_error(self, service, clock):
        token = service.issue(1)
        clock.advance(days=1)
        with pytest.raises(AuthError):
            service.verify(token)


class TestTokenTampering:
    """Tests for invalid tokens"""

    def test_flipped_signature_characters_fail(self, service):
        token = service.issue(1)
        header, payload, signature = token.split(".")

        # The final base64url character carries padding bits, so skip it
        for position in range(len(signature) - 1):
            original = signature[position]
            replacement = "A" if original != "A" else "B"
            tampered_signature = signature[:position] + replacement + signature[position + 1:]
            tampered = ".".join([header, payload, tampered_signature])

            with pytest.raises(TokenInvalidError):
                service.verify(tampered)

    def test_modified_payload_fails(self, service):
        token = service.issue(1)
        forged = jwt.encode({"id": 2, "exp": 9999999999}, "other-secret", algorithm="HS256")
        header, _, signature = token.split(".")
        _, forged_payload, _ = forged.split(".")

        with pytest.raises(TokenInvalidError):
            service.verify(".".join([header, forged_payload, signature]))

    def test_token_signed_with_other_secret_fails(self, service, clock):
        other = TokenService("another-secret", clock=clock)
        with pytest.raises(TokenInvalidError):
            service.verify(other.issue(1))

    def test_unsigned_token_fails(self, service):
        header = _b64url({"alg": "none", "typ": "JWT"})
        payload = _b64url({"id": 1, "exp": 9999999999})
        with pytest.raises(TokenInvalidError):
            service.verify(f"{header}.{payload}.")

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer"])
    def test_malformed_token_fails(self, service, token):
        with pytest.raises(TokenInvalidError):
            service.verify(token)

    def test_token_without_id_claim_fails(self, service):
        exp = int((ISSUED_AT + timedelta(hours=1)).timestamp())
        token = jwt.encode({"sub": "1", "exp": exp}, SECRET, algorithm="HS256")
        with pytest.raises(TokenInvalidError):
            service.verify(token)
