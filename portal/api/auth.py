# portal/api/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from portal.api.deps import ActorContext, get_current_actor
from portal.schemas.auth import ActorRead


router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=ActorRead, summary="Who am I (from the session token)")
def me(actor: ActorContext = Depends(get_current_actor)):
    return ActorRead(id=actor.id, email=actor.email, role=actor.role, kind=actor.kind)
