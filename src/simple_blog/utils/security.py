"""Security utilities for password hashing, session tokens and session cookies."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache

import bcrypt
from fastapi import Response
from jose import JWTError, jwt
from pydantic import ValidationError

from simple_blog.config import Settings, get_settings
from simple_blog.schemas.session import SessionClaims, SessionIdentity
from simple_blog.services.base import InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plain text password using bcrypt.

    The random salt is embedded in the returned hash.
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password.

    ``bcrypt.checkpw`` compares digests in constant time. A malformed stored
    hash verifies as False.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


class SessionTokenCodec:
    """Issues and verifies signed, self-contained session tokens (JWT).

    Verification depends only on the token and the secret; there is no
    server-side session table. Rotating the secret invalidates every
    outstanding token.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 60 * 60 * 24,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def issue(
        self,
        user_id: int,
        username: str,
        ttl_seconds: int | None = None,
        now: datetime | None = None,
    ) -> str:
        """Create a session token.

        Args:
            user_id: ID of the authenticated user.
            username: The user's username.
            ttl_seconds: Lifetime of the token. Defaults to the codec's TTL.
            now: Issue time. Defaults to the current time.

        Returns:
            Encoded JWT token string
        """
        issued_at = now or datetime.now(UTC)
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        expire = issued_at + timedelta(seconds=ttl)

        claims = {
            "userId": user_id,
            "username": username,
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionIdentity:
        """Decode and validate a session token.

        Raises:
            InvalidTokenError: If the signature is invalid, the payload is
                malformed or the token has expired.
        """
        if not token:
            raise InvalidTokenError("Empty session token")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(f"Token rejected: {e}") from e

        try:
            claims = SessionClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError("Token payload is malformed") from e

        return SessionIdentity.from_claims(claims)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionTokenCodec":
        return cls(
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.session_ttl_seconds,
        )


def set_session_cookie(response: Response, token: str, settings: Settings | None = None) -> None:
    """Attach the session token as an HTTP-only, SameSite=Strict cookie."""
    settings = settings or get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def clear_session_cookie(response: Response, settings: Settings | None = None) -> None:
    """Expire the session cookie with the same attributes it was set with."""
    settings = settings or get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@lru_cache
def get_token_codec() -> SessionTokenCodec:
    """Get the process-wide token codec built from settings."""
    return SessionTokenCodec.from_settings(get_settings())


@lru_cache
def dummy_password_hash() -> str:
    """A hash no user owns, checked when a login names an unknown username."""
    return hash_password("no-such-user-placeholder")
