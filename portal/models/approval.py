# portal/models/approval.py
from __future__ import annotations

import enum
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.actor import ActorKind
from portal.models.base import Base, utcnow


class ApprovalStatus(str, enum.Enum):
    approved = "APPROVED"
    changes_requested = "CHANGES_REQUESTED"


class Approval(Base):
    """Immutable review decision. Never updated or deleted."""

    __tablename__ = "approvals"
    __table_args__ = (
        Index("ix_approvals_deliverable_time", "deliverable_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    deliverable_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("deliverables.id", ondelete="CASCADE"),
        nullable=False,
    )

    # judged version; NULL when the deliverable had no versions yet
    version_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("deliverable_versions.id", ondelete="SET NULL"),
        nullable=True,
    )

    status: Mapped[str] = mapped_column(String(32), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    approver_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    approver_type: Mapped[str] = mapped_column(String(16), nullable=False, default=ActorKind.user.value)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
