# portal/api/versions.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from portal.api.deps import ActorContext, RequirePermission
from portal.api.errors import to_http
from portal.core.db import get_db
from portal.schemas.deliverable_version import DeliverableVersionCreate, DeliverableVersionRead
from portal.services.errors import ReviewError
from portal.services.version_service import VersionService


router = APIRouter(prefix="/deliverables", tags=["versions"])

VERSION_CREATE_OPENAPI_EXAMPLES = {
    "upload": {
        "summary": "Register an uploaded file as the next version",
        "description": "Number = max(existing version numbers, deliverable.version) + 1.",
        "value": {
            "file_url": "https://drive.example.com/files/launch-teaser-v3.mp4",
            "thumbnail_url": "https://drive.example.com/files/launch-teaser-v3.jpg",
            "notes": "Colour grade pass, new end card",
        },
    }
}


@router.get("/{deliverable_id}/versions", response_model=list[DeliverableVersionRead])
def list_versions(deliverable_id: UUID, db: Session = Depends(get_db)):
    return VersionService(db).list_versions(deliverable_id)


@router.post(
    "/{deliverable_id}/versions",
    response_model=DeliverableVersionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload new version",
    description=(
        "Appends a version and moves the deliverable's current file / thumbnail / version "
        "to it in the same transaction."
    ),
)
def create_version(
    deliverable_id: UUID,
    body: DeliverableVersionCreate = Body(..., openapi_examples=VERSION_CREATE_OPENAPI_EXAMPLES),
    actor: ActorContext = Depends(RequirePermission("deliverable.version.create")),
    db: Session = Depends(get_db),
):
    try:
        version = VersionService(db).create_version(
            deliverable_id=deliverable_id,
            file_url=body.file_url,
            thumbnail_url=body.thumbnail_url,
            notes=body.notes,
            actor=actor.ref,
        )
    except ReviewError as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    db.refresh(version)
    return version
