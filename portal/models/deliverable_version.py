# portal/models/deliverable_version.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.base import Base, utcnow


class DeliverableVersion(Base):
    """Append-only file history of a deliverable. Rows are never updated."""

    __tablename__ = "deliverable_versions"
    __table_args__ = (
        # concurrent uploads racing for the same number: one of them gets IntegrityError
        UniqueConstraint("deliverable_id", "version_number", name="uq_deliverable_versions_number"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    deliverable_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("deliverables.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    version_number: Mapped[int] = mapped_column(Integer, nullable=False)

    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
