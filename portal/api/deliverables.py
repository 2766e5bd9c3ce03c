# portal/api/deliverables.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.api.deps import ActorContext, RequirePermission, get_current_actor
from portal.api.errors import to_http
from portal.core.db import get_db
from portal.fsm.deliverable_fsm import ReviewAction, TransitionNotAllowed
from portal.models.approval import ApprovalStatus
from portal.models.deliverable import Deliverable, DeliverableStatus
from portal.models.project import Project
from portal.schemas.approval import ApprovalRead, ReviewDecisionRequest, ReviewDecisionResponse
from portal.schemas.deliverable import DeliverableCreate, DeliverableRead
from portal.schemas.deliverable_review import DeliverableReview
from portal.services.approval_service import list_approvals, record_decision
from portal.services.deliverable_service import get_deliverable, review_summary, submit_for_review
from portal.services.errors import ReviewError


router = APIRouter(prefix="/deliverables", tags=["deliverables"])

REVIEW_DECISION_OPENAPI_EXAMPLES = {
    "latest": {
        "summary": "Judge the latest version",
        "description": "Without version_id the newest uploaded version is judged (or none, if nothing was uploaded yet).",
        "value": {"notes": "Looks great"},
    },
    "explicit_version": {
        "summary": "Judge a specific version",
        "value": {
            "notes": "v2 end card is the one",
            "version_id": "55555555-5555-5555-5555-555555555555",
        },
    },
}

DELIVERABLE_CREATE_OPENAPI_EXAMPLES = {
    "basic": {
        "summary": "Create deliverable",
        "description": "New deliverable starts as DRAFT with version 0.",
        "value": {
            "project_id": "22222222-2222-2222-2222-222222222222",
            "name": "Launch teaser 30s",
            "description": "Main cut for social",
        },
    },
}


def _ensure_can_view(db: Session, actor: ActorContext, d: Deliverable) -> None:
    """Clients only see deliverables of their own projects."""
    if actor.is_staff:
        return
    project = db.get(Project, d.project_id)
    if project is None or project.client_id != actor.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("", response_model=DeliverableRead, status_code=status.HTTP_201_CREATED)
def create_deliverable(
    data: DeliverableCreate = Body(..., openapi_examples=DELIVERABLE_CREATE_OPENAPI_EXAMPLES),
    actor: ActorContext = Depends(RequirePermission("deliverable.create")),
    db: Session = Depends(get_db),
):
    if db.get(Project, data.project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")

    d = Deliverable(
        project_id=data.project_id,
        name=data.name,
        description=data.description,
        status=DeliverableStatus.draft.value,
        version=0,
        file_url=data.file_url,
        thumbnail_url=data.thumbnail_url,
    )
    db.add(d)
    db.commit()
    db.refresh(d)
    return d


@router.get("", response_model=list[DeliverableRead])
def list_deliverables(
    project_id: UUID | None = Query(default=None, description="Filter by project."),
    actor: ActorContext = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    stmt = select(Deliverable)
    if project_id is not None:
        stmt = stmt.where(Deliverable.project_id == project_id)
    if not actor.is_staff:
        stmt = stmt.join(Project, Project.id == Deliverable.project_id).where(Project.client_id == actor.id)

    return list(db.execute(stmt.order_by(Deliverable.created_at.desc())).scalars())


@router.get("/{deliverable_id}", response_model=DeliverableRead)
def get_deliverable_endpoint(
    deliverable_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        d = get_deliverable(db, deliverable_id)
    except ReviewError as e:
        raise to_http(e)

    _ensure_can_view(db, actor, d)
    return d


@router.get(
    "/{deliverable_id}/review",
    response_model=DeliverableReview,
    summary="Review dashboard for a deliverable",
    description=(
        "Deliverable with its version history (newest first), the latest decision "
        "and counters for approvals, annotations and unresolved top-level comments."
    ),
)
def get_review(
    deliverable_id: UUID,
    actor: ActorContext = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        summary = review_summary(db, deliverable_id)
    except ReviewError as e:
        raise to_http(e)

    _ensure_can_view(db, actor, summary.deliverable)

    return DeliverableReview.model_validate(summary)


@router.post(
    "/{deliverable_id}/submit-for-review",
    response_model=DeliverableRead,
    summary="Send deliverable to the client for review",
    description="deliverable.status → `IN_REVIEW`. Allowed only from `DRAFT` and `REJECTED`.",
)
def submit_for_review_endpoint(
    deliverable_id: UUID,
    actor: ActorContext = Depends(RequirePermission("deliverable.submit_for_review")),
    db: Session = Depends(get_db),
):
    try:
        d = submit_for_review(db, deliverable_id=deliverable_id, actor=actor.ref)
    except (ReviewError, TransitionNotAllowed) as e:
        db.rollback()
        raise to_http(e)

    db.commit()
    db.refresh(d)
    return d


def _decide(
    db: Session,
    *,
    deliverable_id: UUID,
    action: ReviewAction,
    body: ReviewDecisionRequest | None,
    actor: ActorContext,
) -> ReviewDecisionResponse:
    body = body or ReviewDecisionRequest()
    try:
        approval, to_status = record_decision(
            db,
            deliverable_id=deliverable_id,
            action=action,
            actor=actor.ref,
            notes=body.notes,
            version_id=body.version_id,
        )
    except (ReviewError, TransitionNotAllowed) as e:
        db.rollback()
        raise to_http(e)

    # approval row + deliverable.status in one commit
    db.commit()
    db.refresh(approval)

    return ReviewDecisionResponse(
        approval=ApprovalRead.model_validate(approval),
        status=ApprovalStatus(approval.status),
        deliverable_status=to_status,
    )


@router.post(
    "/{deliverable_id}/approve",
    response_model=ReviewDecisionResponse,
    summary="Approve deliverable",
    description=(
        "Records an `APPROVED` decision against the judged version and sets "
        "deliverable.status → `APPROVED`. Every call appends a decision row."
    ),
)
def approve(
    deliverable_id: UUID,
    body: ReviewDecisionRequest | None = Body(
        default=None,
        openapi_examples=REVIEW_DECISION_OPENAPI_EXAMPLES,
    ),
    actor: ActorContext = Depends(RequirePermission("deliverable.decision")),
    db: Session = Depends(get_db),
):
    return _decide(db, deliverable_id=deliverable_id, action=ReviewAction.APPROVE, body=body, actor=actor)


@router.post(
    "/{deliverable_id}/request-changes",
    response_model=ReviewDecisionResponse,
    summary="Request changes on deliverable",
    description=(
        "Records a `CHANGES_REQUESTED` decision and sets deliverable.status → `IN_REVIEW` "
        "regardless of the previous status."
    ),
)
def request_changes(
    deliverable_id: UUID,
    body: ReviewDecisionRequest | None = Body(
        default=None,
        openapi_examples=REVIEW_DECISION_OPENAPI_EXAMPLES,
    ),
    actor: ActorContext = Depends(RequirePermission("deliverable.decision")),
    db: Session = Depends(get_db),
):
    return _decide(
        db, deliverable_id=deliverable_id, action=ReviewAction.REQUEST_CHANGES, body=body, actor=actor
    )


@router.get("/{deliverable_id}/approvals", response_model=list[ApprovalRead])
def list_approvals_endpoint(deliverable_id: UUID, db: Session = Depends(get_db)):
    return list_approvals(db, deliverable_id)
