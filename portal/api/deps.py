# portal/api/deps.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from portal.core.config import settings
from portal.core.rbac import Forbidden, Role, ensure_allowed, is_staff
from portal.core.security import InvalidToken, decode_access_token
from portal.models.actor import ActorKind, ActorRef


# -----------------------------------------------------------------------------
# Session token: cookie first (browser portal), then Authorization: Bearer (API clients)
# -----------------------------------------------------------------------------

session_cookie = APIKeyCookie(
    name=settings.session_cookie_name,
    auto_error=False,
    description="Session JWT set at login.",
)
bearer = HTTPBearer(auto_error=False, description="Same session JWT as a bearer token.")


@dataclass(frozen=True)
class ActorContext:
    id: UUID
    role: Role
    email: str | None = None

    @property
    def kind(self) -> ActorKind:
        # derived server-side, never accepted from the request body
        return ActorKind.client if self.role is Role.client else ActorKind.user

    @property
    def ref(self) -> ActorRef:
        return ActorRef(kind=self.kind, id=self.id)

    @property
    def is_staff(self) -> bool:
        return is_staff(self.role.value)


def _token_from_request(
    cookie_token: str | None,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    if cookie_token:
        return cookie_token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


def get_current_actor(
    cookie_token: str | None = Depends(session_cookie),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> ActorContext:
    token = _token_from_request(cookie_token, credentials)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
        actor_id = UUID(str(payload["sub"]))
    except (InvalidToken, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return ActorContext(id=actor_id, role=Role(payload["role"]), email=payload.get("email"))


class RequirePermission:
    """FastAPI dependency: authenticated actor whose role is allowed for `permission`."""

    def __init__(self, permission: str):
        self.permission = permission

    def __call__(self, actor: ActorContext = Depends(get_current_actor)) -> ActorContext:
        try:
            ensure_allowed(self.permission, actor.role.value)
        except Forbidden as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        return actor
