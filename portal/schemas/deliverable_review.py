# portal/schemas/deliverable_review.py

from __future__ import annotations

from pydantic import BaseModel

from portal.schemas.approval import ApprovalRead
from portal.schemas.deliverable import DeliverableRead
from portal.schemas.deliverable_version import DeliverableVersionRead


class DeliverableReview(BaseModel):
    deliverable: DeliverableRead
    versions: list[DeliverableVersionRead]
    last_approval: ApprovalRead | None = None

    approvals_count: int
    annotations_count: int
    open_comments_count: int

    model_config = {"from_attributes": True}
