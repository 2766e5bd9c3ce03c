# portal/schemas/approval.py

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from portal.models.actor import ActorKind
from portal.models.approval import ApprovalStatus
from portal.models.deliverable import DeliverableStatus


class ReviewDecisionRequest(BaseModel):
    notes: str | None = Field(
        default=None,
        max_length=5000,
        description="Reviewer notes (optional).",
        examples=["Looks great, ship it", "Logo needs to be bigger in the end card"],
    )
    version_id: UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("version_id", "versionId"),
        description="Version being judged. Defaults to the latest version.",
    )

    model_config = {"extra": "forbid"}


class ApprovalRead(BaseModel):
    id: UUID
    deliverable_id: UUID
    version_id: UUID | None = None

    status: ApprovalStatus
    notes: str

    approver_id: UUID
    approver_type: ActorKind

    created_at: datetime

    model_config = {"from_attributes": True}


class ReviewDecisionResponse(BaseModel):
    approval: ApprovalRead
    status: ApprovalStatus
    deliverable_status: DeliverableStatus
