# portal/schemas/auth.py
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from portal.core.rbac import Role
from portal.models.actor import ActorKind


class ActorRead(BaseModel):
    id: UUID
    email: str | None = None
    role: Role
    kind: ActorKind
