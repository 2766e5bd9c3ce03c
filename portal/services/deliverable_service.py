# portal/services/deliverable_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from portal.fsm.deliverable_fsm import ReviewAction, apply_transition
from portal.models.actor import ActorRef
from portal.models.annotation import Annotation
from portal.models.approval import Approval
from portal.models.deliverable import Deliverable
from portal.models.deliverable_version import DeliverableVersion
from portal.models.timeline_comment import TimelineComment
from portal.services.errors import NotFound

logger = logging.getLogger(__name__)


def get_deliverable(db: Session, deliverable_id: UUID, *, for_update: bool = False) -> Deliverable:
    """Load a deliverable or raise NotFound.

    for_update=True takes a row lock (PostgreSQL) so writers on the same
    deliverable are serialized until commit.
    """
    stmt = select(Deliverable).where(Deliverable.id == deliverable_id)
    if for_update:
        stmt = stmt.with_for_update()

    d = db.execute(stmt).scalar_one_or_none()
    if d is None:
        raise NotFound("Deliverable not found")
    return d


def submit_for_review(db: Session, *, deliverable_id: UUID, actor: ActorRef) -> Deliverable:
    d = get_deliverable(db, deliverable_id, for_update=True)

    from_status = d.status
    to_status, _ = apply_transition(d.status, ReviewAction.SUBMIT_FOR_REVIEW)
    d.status = to_status.value
    db.flush()

    logger.info(
        "deliverable submitted for review: %s -> %s",
        from_status,
        to_status.value,
        extra={"deliverable_id": d.id, "actor_id": actor.id, "actor_kind": actor.kind.value},
    )
    return d


@dataclass(frozen=True)
class ReviewSummary:
    deliverable: Deliverable
    versions: list[DeliverableVersion]
    last_approval: Approval | None
    approvals_count: int
    annotations_count: int
    open_comments_count: int


def _count(db: Session, stmt) -> int:
    return int(db.execute(stmt).scalar_one() or 0)


def review_summary(db: Session, deliverable_id: UUID) -> ReviewSummary:
    d = get_deliverable(db, deliverable_id)

    versions = list(
        db.execute(
            select(DeliverableVersion)
            .where(DeliverableVersion.deliverable_id == deliverable_id)
            .order_by(DeliverableVersion.version_number.desc())
        ).scalars()
    )

    last_approval = db.execute(
        select(Approval)
        .where(Approval.deliverable_id == deliverable_id)
        .order_by(Approval.created_at.desc())
        .limit(1)
    ).scalar_one_or_none()

    return ReviewSummary(
        deliverable=d,
        versions=versions,
        last_approval=last_approval,
        approvals_count=_count(
            db,
            select(func.count(Approval.id)).where(Approval.deliverable_id == deliverable_id),
        ),
        annotations_count=_count(
            db,
            select(func.count(Annotation.id)).where(Annotation.deliverable_id == deliverable_id),
        ),
        open_comments_count=_count(
            db,
            select(func.count(TimelineComment.id)).where(
                TimelineComment.deliverable_id == deliverable_id,
                TimelineComment.parent_id.is_(None),
                TimelineComment.resolved.is_(False),
            ),
        ),
    )
