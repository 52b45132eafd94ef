"""
Security utilities: password hashing and JWT issuance/verification.

This module centralizes all cryptographic operations so they're easy to
audit and update. Two concerns are handled here:

1. PASSWORD HASHING (Argon2)
   - Passwords are never stored in plaintext
   - Argon2id is memory-hard and time-hard, which makes GPU cracking
     expensive. Each hash carries its own random salt and cost parameters.
   - We use passlib's CryptContext for safe, high-level Argon2 operations

2. JWT TOKENS (JSON Web Tokens)
   - After login, the user receives a signed JWT identifying them
   - The token is signed with SECRET_KEY using HS256 (HMAC-SHA256)
   - Tokens expire after ACCESS_TOKEN_EXPIRE_MINUTES
   - The server is stateless: no session storage needed

TokenIssuer holds the signing secret, algorithm and TTL. A single instance
(token_issuer) is built from settings at import time and shared read-only
by every request; tests build their own instances with a fixed clock.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt
from passlib.context import CryptContext

from pet_tracker.config import settings
from pet_tracker.exceptions import InvalidTokenError, TokenExpiredError


# ---------------------------------------------------------------------------
# 1. Password Hashing (Argon2)
# ---------------------------------------------------------------------------

# CryptContext manages hashing schemes. "argon2" is the active scheme.
# If the scheme ever changes, old hashes keep verifying with the original
# scheme and new passwords use the new one ("deprecated='auto'").
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Args:
        plain_password: The user's raw password input.

    Returns:
        An Argon2 hash string (e.g., "$argon2id$v=19$m=65536,t=3,p=4$...").
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored Argon2 hash.

    Args:
        plain_password: The password the user just typed.
        hashed_password: The hash stored in the database.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)


# ---------------------------------------------------------------------------
# 2. JWT Tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenClaims:
    """The identity carried by a verified token."""
    user_id: uuid.UUID
    username: str
    role: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """
    Issues and verifies signed, time-bounded identity tokens.

    The token payload contains:
      - "sub": The subject (user ID as string) — standard JWT claim
      - "username": The user's username at issue time
      - "role": The user's role at issue time (informational only;
        authorization always re-reads the role from the database)
      - "iat" / "exp": Issued-at and expiration timestamps

    Args:
        secret_key: HMAC signing secret.
        algorithm: JWT signing algorithm, e.g. "HS256".
        ttl: How long an issued token stays valid.
        clock: Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, user) -> str:
        """
        Create a signed JWT for an authenticated user.

        Deterministic for identical user and clock reading.

        Returns:
            An encoded JWT string.
        """
        now = self._clock()
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and verify a JWT issued by this issuer.

        Expiry is checked against the issuer's clock rather than the wall
        clock, so a token is valid exactly until issue time + TTL.

        Raises:
            TokenExpiredError: If the token is past its expiry.
            InvalidTokenError: If the token is malformed, tampered with,
                signed with another secret, or missing required claims.

        Returns:
            The verified TokenClaims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise InvalidTokenError()

        try:
            user_id = uuid.UUID(payload["sub"])
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            username = payload["username"]
            role = payload["role"]
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError()

        if self._clock() >= expires_at:
            raise TokenExpiredError()

        return TokenClaims(
            user_id=user_id,
            username=username,
            role=role,
            expires_at=expires_at,
        )


# Process-wide issuer: the secret is read once from settings and never changes
token_issuer = TokenIssuer(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
)
