"""Password hashing and bearer tokens.

Passwords are stored as Argon2 hashes. Tokens are HS256 JWTs carrying the
user id in ``sub`` and ``type == "access"``; there is no refresh flow, so a
token is valid until it expires.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from clarity.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

TOKEN_TYPE = "access"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Issue a token identifying ``user_id``.

    Args:
        user_id: Subject of the token
        expires_delta: Lifetime; defaults to JWT_ACCESS_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_expire_minutes)
    claims = {
        "sub": str(user_id),
        "type": TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry; raises JWTError otherwise."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def get_user_id_from_token(token: str) -> UUID:
    """
    Resolve a bearer token to the user id it was issued for.

    Raises:
        JWTError: Bad signature, expired, wrong type or no subject
        ValueError: Subject is not a UUID
    """
    claims = decode_token(token)
    if claims.get("type") != TOKEN_TYPE:
        raise JWTError("Not an access token")

    subject = claims.get("sub")
    if not subject:
        raise JWTError("Token has no subject")
    return UUID(subject)
