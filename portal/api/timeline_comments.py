# portal/api/timeline_comments.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from portal.api.deps import ActorContext, RequirePermission
from portal.api.errors import to_http
from portal.core.db import get_db
from portal.schemas.common import SuccessResponse
from portal.schemas.timeline_comment import (
    TimelineCommentCreate,
    TimelineCommentRead,
    TimelineCommentUpdate,
)
from portal.services.errors import ReviewError
from portal.services.timeline_comment_service import TimelineCommentService


router = APIRouter(prefix="/deliverables", tags=["timeline-comments"])

COMMENT_CREATE_OPENAPI_EXAMPLES = {
    "top_level": {
        "summary": "Comment at 3.2s",
        "value": {"content": "Can we hold this frame a bit longer?", "timestamp": 3.2},
    },
    "reply": {
        "summary": "Reply to a top-level comment",
        "description": "parent_id must point at a top-level comment of the same deliverable.",
        "value": {
            "content": "Extended by 12 frames in v4",
            "timestamp": 3.2,
            "parent_id": "66666666-6666-6666-6666-666666666666",
        },
    },
}


@router.get(
    "/{deliverable_id}/timeline-comments",
    response_model=list[TimelineCommentRead],
    summary="Timeline comments (threaded)",
    description="Top-level comments ordered by timestamp, each with its replies ordered by creation time.",
)
def list_comments(deliverable_id: UUID, db: Session = Depends(get_db)):
    return TimelineCommentService(db).list_comments(deliverable_id)


@router.post(
    "/{deliverable_id}/timeline-comments",
    response_model=TimelineCommentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    deliverable_id: UUID,
    body: TimelineCommentCreate = Body(..., openapi_examples=COMMENT_CREATE_OPENAPI_EXAMPLES),
    actor: ActorContext = Depends(RequirePermission("deliverable.comment.write")),
    db: Session = Depends(get_db),
):
    try:
        c = TimelineCommentService(db).create_comment(
            deliverable_id=deliverable_id,
            content=body.content,
            timestamp=body.timestamp,
            parent_id=body.parent_id,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    db.refresh(c)
    return c


@router.patch("/{deliverable_id}/timeline-comments/{comment_id}", response_model=TimelineCommentRead)
def update_comment(
    deliverable_id: UUID,
    comment_id: UUID,
    body: TimelineCommentUpdate,
    actor: ActorContext = Depends(RequirePermission("deliverable.comment.write")),
    db: Session = Depends(get_db),
):
    try:
        c = TimelineCommentService(db).update_comment(
            deliverable_id=deliverable_id,
            comment_id=comment_id,
            resolved=body.resolved,
            content=body.content,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    db.refresh(c)
    return c


@router.delete("/{deliverable_id}/timeline-comments/{comment_id}", response_model=SuccessResponse)
def delete_comment(
    deliverable_id: UUID,
    comment_id: UUID,
    actor: ActorContext = Depends(RequirePermission("deliverable.comment.write")),
    db: Session = Depends(get_db),
):
    try:
        TimelineCommentService(db).delete_comment(
            deliverable_id=deliverable_id,
            comment_id=comment_id,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    return SuccessResponse()
