# portal/services/approval_service.py
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.fsm.deliverable_fsm import RECORD_APPROVAL, ReviewAction, apply_transition
from portal.models.actor import ActorRef
from portal.models.approval import Approval, ApprovalStatus
from portal.models.deliverable import DeliverableStatus
from portal.models.deliverable_version import DeliverableVersion
from portal.services.deliverable_service import get_deliverable
from portal.services.errors import NotFound
from portal.services.version_service import VersionService

logger = logging.getLogger(__name__)


def list_approvals(db: Session, deliverable_id: UUID) -> list[Approval]:
    return list(
        db.execute(
            select(Approval)
            .where(Approval.deliverable_id == deliverable_id)
            .order_by(Approval.created_at.asc())
        ).scalars()
    )


def _resolve_version_id(db: Session, deliverable_id: UUID, version_id: UUID | None) -> UUID | None:
    """Explicit version, else latest, else None (no uploads yet is still reviewable)."""
    if version_id is not None:
        v = db.get(DeliverableVersion, version_id)
        if v is None or v.deliverable_id != deliverable_id:
            raise NotFound("Version not found")
        return v.id

    latest = VersionService(db).latest_version(deliverable_id)
    return latest.id if latest else None


def record_decision(
    db: Session,
    *,
    deliverable_id: UUID,
    action: ReviewAction,
    actor: ActorRef,
    notes: str | None = None,
    version_id: UUID | None = None,
) -> tuple[Approval, DeliverableStatus]:
    """
    Approve / request changes.

    Writes the Approval row and the new Deliverable.status in the caller's transaction
    (single commit in the router). Every call appends a row, re-approving included:
    the table is the review audit log.
    """
    # 1) Load + lock deliverable
    d = get_deliverable(db, deliverable_id, for_update=True)
    from_status = d.status

    # 2) FSM
    to_status, side_effects = apply_transition(d.status, action)

    # 3) Judged version
    judged_version_id = _resolve_version_id(db, d.id, version_id)

    # 4) Side effects
    approval: Approval | None = None
    for eff in side_effects:
        if eff.kind == RECORD_APPROVAL:
            decision: ApprovalStatus = eff.payload["status"]
            approval = Approval(
                deliverable_id=d.id,
                version_id=judged_version_id,
                status=decision.value,
                notes=notes or "",
                approver_id=actor.id,
                approver_type=actor.kind.value,
            )
            db.add(approval)

    if approval is None:
        # FSM table guarantees a decision for approve/request_changes
        raise ValueError(f"Action '{action.value}' is not a review decision")

    # 5) Update deliverable
    d.status = to_status.value
    db.flush()

    logger.info(
        "review decision %s: %s -> %s (version %s)",
        approval.status,
        from_status,
        to_status.value,
        judged_version_id,
        extra={"deliverable_id": d.id, "actor_id": actor.id, "actor_kind": actor.kind.value},
    )
    return approval, to_status
