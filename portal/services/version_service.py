# portal/services/version_service.py
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.models.actor import ActorRef
from portal.models.deliverable import Deliverable
from portal.models.deliverable_version import DeliverableVersion
from portal.services.deliverable_service import get_deliverable
from portal.services.errors import InvalidReviewInput, VersionConflict

logger = logging.getLogger(__name__)


class VersionService:
    """
    Append-only version history + the deliverable's denormalized "current file".

    Caller owns the transaction: everything here is flushed, the router commits once,
    so the version row and the deliverable pointers land together or not at all.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_versions(self, deliverable_id: UUID) -> list[DeliverableVersion]:
        return list(
            self.db.execute(
                select(DeliverableVersion)
                .where(DeliverableVersion.deliverable_id == deliverable_id)
                .order_by(DeliverableVersion.version_number.desc())
            ).scalars()
        )

    def latest_version(self, deliverable_id: UUID) -> DeliverableVersion | None:
        return self.db.execute(
            select(DeliverableVersion)
            .where(DeliverableVersion.deliverable_id == deliverable_id)
            .order_by(DeliverableVersion.version_number.desc())
            .limit(1)
        ).scalar_one_or_none()

    def next_version_number(self, deliverable: Deliverable) -> int:
        # Both signals count: legacy deliverables may carry version > 0 with no rows,
        # and the counter may lag behind the table.
        max_row = self.db.execute(
            select(func.max(DeliverableVersion.version_number)).where(
                DeliverableVersion.deliverable_id == deliverable.id
            )
        ).scalar_one_or_none()
        return max(max_row or 0, deliverable.version or 0) + 1

    def create_version(
        self,
        *,
        deliverable_id: UUID,
        file_url: str,
        thumbnail_url: str | None,
        notes: str | None,
        actor: ActorRef,
    ) -> DeliverableVersion:
        if not file_url or not file_url.strip():
            raise InvalidReviewInput("File URL is required")

        attempts = max(1, settings.version_conflict_retries)

        for attempt in range(1, attempts + 1):
            deliverable = get_deliverable(self.db, deliverable_id, for_update=True)
            number = self.next_version_number(deliverable)

            # Savepoint: a losing racer rolls back only this attempt, not the caller's tx
            nested = self.db.begin_nested()
            try:
                version = DeliverableVersion(
                    deliverable_id=deliverable.id,
                    version_number=number,
                    file_url=file_url,
                    thumbnail_url=thumbnail_url,
                    notes=notes,
                    created_by=actor.id,
                )
                self.db.add(version)

                deliverable.file_url = file_url
                deliverable.thumbnail_url = thumbnail_url
                deliverable.version = number

                self.db.flush()
                nested.commit()
            except IntegrityError:
                nested.rollback()
                logger.warning(
                    "version number %s already taken (attempt %s/%s)",
                    number,
                    attempt,
                    attempts,
                    extra={"deliverable_id": deliverable_id},
                )
                continue

            logger.info(
                "version %s created",
                number,
                extra={"deliverable_id": deliverable_id, "actor_id": actor.id, "actor_kind": actor.kind.value},
            )
            return version

        raise VersionConflict(
            f"Could not allocate a version number after {attempts} attempts; retry the upload"
        )
