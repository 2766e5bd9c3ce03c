# portal/api/annotations.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from portal.api.deps import ActorContext, RequirePermission
from portal.api.errors import to_http
from portal.core.db import get_db
from portal.schemas.annotation import AnnotationCreate, AnnotationRead
from portal.schemas.common import SuccessResponse
from portal.services.annotation_service import AnnotationService
from portal.services.errors import ReviewError


router = APIRouter(prefix="/deliverables", tags=["annotations"])

ANNOTATION_CREATE_OPENAPI_EXAMPLES = {
    "point": {
        "summary": "Point marker on the first frame",
        "description": "timestamp=0 is valid.",
        "value": {"type": "point", "coordinates": {"x": 1, "y": 2}, "timestamp": 0},
    },
    "rect": {
        "summary": "Rectangle with a note",
        "value": {
            "type": "rect",
            "coordinates": {"x": 0.1, "y": 0.2, "w": 0.3, "h": 0.15},
            "timestamp": 12.48,
            "color": "#00d1ff",
            "comment": "Logo too close to the edge here",
        },
    },
}


@router.get("/{deliverable_id}/annotations", response_model=list[AnnotationRead])
def list_annotations(deliverable_id: UUID, db: Session = Depends(get_db)):
    return AnnotationService(db).list_annotations(deliverable_id)


@router.post(
    "/{deliverable_id}/annotations",
    response_model=AnnotationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_annotation(
    deliverable_id: UUID,
    body: AnnotationCreate = Body(..., openapi_examples=ANNOTATION_CREATE_OPENAPI_EXAMPLES),
    actor: ActorContext = Depends(RequirePermission("deliverable.annotation.write")),
    db: Session = Depends(get_db),
):
    try:
        a = AnnotationService(db).create_annotation(
            deliverable_id=deliverable_id,
            type=body.type,
            coordinates=body.coordinates,
            timestamp=body.timestamp,
            color=body.color,
            comment=body.comment,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    db.refresh(a)
    return a


@router.delete("/{deliverable_id}/annotations/{annotation_id}", response_model=SuccessResponse)
def delete_annotation(
    deliverable_id: UUID,
    annotation_id: UUID,
    actor: ActorContext = Depends(RequirePermission("deliverable.annotation.write")),
    db: Session = Depends(get_db),
):
    try:
        AnnotationService(db).delete_annotation(
            deliverable_id=deliverable_id,
            annotation_id=annotation_id,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    return SuccessResponse()
