# portal/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from portal.core.config import settings
from portal.core.rbac import Role


class InvalidToken(Exception):
    pass


def create_access_token(
    *,
    subject: UUID | str,
    role: Role | str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Session token: sub = user id (staff) or client id (CLIENT role)."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, Any] = {
        "sub": str(subject),
        "role": role.value if isinstance(role, Role) else str(role),
        "exp": expire,
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidToken("Invalid or expired token") from e

    if not payload.get("sub") or not payload.get("role"):
        raise InvalidToken("Token is missing subject or role")

    try:
        Role(payload["role"])
    except ValueError as e:
        raise InvalidToken(f"Unknown role '{payload['role']}'") from e

    return payload
