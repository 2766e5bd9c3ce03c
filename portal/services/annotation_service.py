# portal/services/annotation_service.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.models.actor import ActorRef
from portal.models.annotation import Annotation
from portal.services.deliverable_service import get_deliverable
from portal.services.errors import InvalidReviewInput, NotFound

logger = logging.getLogger(__name__)


class AnnotationService:
    def __init__(self, db: Session):
        self.db = db

    def list_annotations(self, deliverable_id: UUID) -> list[Annotation]:
        return list(
            self.db.execute(
                select(Annotation)
                .where(Annotation.deliverable_id == deliverable_id)
                .order_by(Annotation.timestamp.asc(), Annotation.created_at.asc())
            ).scalars()
        )

    def create_annotation(
        self,
        *,
        deliverable_id: UUID,
        type: str,
        coordinates: Any,
        timestamp: float | None,
        color: str | None,
        comment: str | None,
        actor: ActorRef,
    ) -> Annotation:
        # timestamp=0 is the first frame, only None means "missing"
        if not type or coordinates is None or timestamp is None:
            raise InvalidReviewInput("Type, coordinates, and timestamp are required")

        d = get_deliverable(self.db, deliverable_id)

        a = Annotation(
            deliverable_id=d.id,
            type=type,
            color=color or settings.default_annotation_color,
            coordinates=coordinates,
            timestamp=float(timestamp),
            comment=comment or "",
            author_id=actor.id,
        )
        self.db.add(a)
        self.db.flush()

        logger.info(
            "annotation %s added at %.3fs",
            a.id,
            a.timestamp,
            extra={"deliverable_id": d.id, "actor_id": actor.id, "actor_kind": actor.kind.value},
        )
        return a

    def delete_annotation(self, *, deliverable_id: UUID, annotation_id: UUID, actor: ActorRef) -> None:
        a = self.db.get(Annotation, annotation_id)
        if a is None or a.deliverable_id != deliverable_id:
            raise NotFound("Annotation not found")

        self.db.delete(a)
        self.db.flush()

        logger.info(
            "annotation %s deleted",
            annotation_id,
            extra={"deliverable_id": deliverable_id, "actor_id": actor.id, "actor_kind": actor.kind.value},
        )
