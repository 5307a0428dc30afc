"""Identity provider token utilities.

Sign-in happens at the external identity provider. The API only verifies the
bearer token it issues and reads the user's uid and email from it.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.settings import settings

# Validate JWT secret key at startup
_DEFAULT_SECRET = "dev-secret-key-change-in-production"

if settings.environment == "production" and settings.identity_jwt_secret == _DEFAULT_SECRET:
    raise RuntimeError(
        "SECURITY ERROR: IDENTITY_JWT_SECRET environment variable must be set in production. "
        "Cannot use default secret key."
    )


@dataclass(frozen=True)
class Identity:
    """Authenticated user as reported by the identity provider."""

    uid: str
    email: str


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token (local development and tests).

    Args:
        data: Data to encode in the token (``sub`` = uid, ``email``)
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.identity_token_expire_minutes
        )
    to_encode.update({"exp": expire})
    if settings.identity_jwt_audience:
        to_encode.setdefault("aud", settings.identity_jwt_audience)
    return jwt.encode(
        to_encode, settings.identity_jwt_secret, algorithm=settings.identity_jwt_algorithm
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT access token.

    Args:
        token: JWT token to decode

    Returns:
        Decoded token payload or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.identity_jwt_secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
            options={"verify_aud": settings.identity_jwt_audience is not None},
        )
    except JWTError:
        return None


def identity_from_token(token: str) -> Identity | None:
    """Read the identity carried by a bearer token, if the token is valid."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    uid = payload.get("sub")
    email = payload.get("email")
    if not uid or not email:
        return None
    return Identity(uid=str(uid), email=str(email).lower())
