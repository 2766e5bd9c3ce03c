# portal/models/annotation.py
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from portal.models.base import Base, utcnow


class Annotation(Base):
    __tablename__ = "annotations"
    __table_args__ = (
        Index("ix_annotations_deliverable_timestamp", "deliverable_id", "timestamp"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    deliverable_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("deliverables.id", ondelete="CASCADE"),
        nullable=False,
    )

    # point / rect / arrow / freehand ... (UI-defined, not enforced)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    color: Mapped[str] = mapped_column(String(16), nullable=False)

    # opaque shape payload from the player overlay
    coordinates: Mapped[Any] = mapped_column(JSON, nullable=False)

    # seconds into the media
    timestamp: Mapped[float] = mapped_column(Float, nullable=False)

    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")

    author_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
