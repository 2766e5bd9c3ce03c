# portal/models/deliverable.py

from __future__ import annotations

import enum
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.base import Base, utcnow


class DeliverableStatus(str, enum.Enum):
    draft = "DRAFT"
    in_review = "IN_REVIEW"
    approved = "APPROVED"
    rejected = "REJECTED"


class Deliverable(Base):
    __tablename__ = "deliverables"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    project_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DeliverableStatus.draft.value,
    )

    # Denormalized from the newest DeliverableVersion; written in the same
    # transaction as the version row (see VersionService.create_version).
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
