"""
Tests for password hashing and the token issuer.

Token tests use a controllable clock so expiry can be checked exactly
without sleeping.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from pet_tracker.exceptions import InvalidTokenError, TokenExpiredError
from pet_tracker.models.user import Role, User
from pet_tracker.security import TokenIssuer, hash_password, verify_password


START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _user() -> User:
    return User(id=uuid.uuid4(), username="alice", email="alice@example.com", role=Role.USER)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("SecurePass123!")
        assert hashed != "SecurePass123!"
        assert hashed.startswith("$argon2")

    def test_hash_is_salted(self):
        assert hash_password("SecurePass123!") != hash_password("SecurePass123!")

    def test_verify(self):
        hashed = hash_password("SecurePass123!")
        assert verify_password("SecurePass123!", hashed) is True
        assert verify_password("WrongPass123!", hashed) is False


class TestTokenIssuer:

    def test_issued_token_verifies_with_identity(self):
        issuer = TokenIssuer("secret", ttl=timedelta(minutes=30), clock=FakeClock(START))
        user = _user()

        claims = issuer.verify(issuer.issue(user))

        assert claims.user_id == user.id
        assert claims.username == "alice"
        assert claims.role == "user"
        assert claims.expires_at == START + timedelta(minutes=30)

    def test_issue_is_deterministic_for_same_clock(self):
        issuer = TokenIssuer("secret", clock=FakeClock(START))
        user = _user()
        assert issuer.issue(user) == issuer.issue(user)

    def test_token_valid_until_expiry_then_rejected(self):
        clock = FakeClock(START)
        issuer = TokenIssuer("secret", ttl=timedelta(minutes=30), clock=clock)
        token = issuer.issue(_user())

        clock.now = START + timedelta(minutes=29, seconds=59)
        issuer.verify(token)

        clock.now = START + timedelta(minutes=30)
        with pytest.raises(TokenExpiredError):
            issuer.verify(token)

    def test_token_from_other_secret_is_rejected(self):
        token = TokenIssuer("other-secret", clock=FakeClock(START)).issue(_user())
        issuer = TokenIssuer("secret", clock=FakeClock(START))
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_tampered_token_is_rejected(self):
        issuer = TokenIssuer("secret", clock=FakeClock(START))
        header, _, signature = issuer.issue(_user()).split(".")
        # Swap in a payload claiming admin, keeping the original signature
        other = User(id=uuid.uuid4(), username="mallory", email="m@example.com", role=Role.ADMIN)
        _, forged_payload, _ = issuer.issue(other).split(".")
        forged = ".".join([header, forged_payload, signature])
        with pytest.raises(InvalidTokenError):
            issuer.verify(forged)

    def test_garbage_is_rejected(self):
        issuer = TokenIssuer("secret")
        with pytest.raises(InvalidTokenError):
            issuer.verify("totally.fake.token")
