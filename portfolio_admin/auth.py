"""
Bearer-token authentication for the admin API.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header
from jose import JWTError, jwt

from .config import get_settings
from .errors import AppError, ErrorMessages, ErrorType


@dataclass(frozen=True)
class AuthUser:
    """The authenticated caller."""

    id: str
    email: Optional[str] = None


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"sub": user_id, "exp": expire}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthUser:
    """Verify a token and return its user, or raise UNAUTHORIZED."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        raise AppError(ErrorType.UNAUTHORIZED, ErrorMessages.UNAUTHORIZED, str(e))

    user_id = payload.get("sub")
    if not user_id:
        raise AppError(
            ErrorType.UNAUTHORIZED,
            ErrorMessages.UNAUTHORIZED,
            "Token has no subject",
        )
    return AuthUser(id=user_id, email=payload.get("email"))


def require_auth(authorization: Optional[str] = Header(None)) -> AuthUser:
    """FastAPI dependency resolving the caller from ``Authorization: Bearer``."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AppError(
            ErrorType.UNAUTHORIZED,
            ErrorMessages.UNAUTHORIZED,
            "Missing bearer token",
        )
    token = authorization.split(" ", 1)[1].strip()
    return decode_access_token(token)
