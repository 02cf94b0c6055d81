"""
Password hashing and session tokens.

Passwords are hashed with bcrypt. Sessions are HS256-signed JWTs carried in an
HTTP-only cookie; the token holds the user id, e-mail and role so that most
requests can be authorized without touching the database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Response

from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain.enums import UserRole
from nt_savitarna.server.core.config import settings
from nt_savitarna.server.core.constant import AUTH_COOKIE_NAME, AUTH_COOKIE_PATH

logger = get_logger(__name__)


@dataclass(frozen=True)
class TokenPayload:
    """Claims of a session token."""

    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.auth.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(user_id: int, email: str, role: str, now: Optional[datetime] = None) -> str:
    """Sign a session token valid for the configured number of days."""
    auth = settings.auth
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=auth.jwt_expires_days),
    }
    return jwt.encode(claims, auth.jwt_secret, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Verify a session token.

    Returns:
        The token claims, or None when the token is expired, tampered with or malformed.
    """
    auth = settings.auth
    try:
        claims = jwt.decode(token, auth.jwt_secret, algorithms=[auth.jwt_algorithm])
        return TokenPayload(user_id=int(claims["userId"]), email=claims["email"], role=claims["role"])
    except jwt.ExpiredSignatureError:
        logger.debug("Session token expired")
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as e:
        logger.debug("Rejected session token: %s", e)
    return None


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.auth.jwt_expires_days * 24 * 60 * 60,
        path=AUTH_COOKIE_PATH,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        path=AUTH_COOKIE_PATH,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
