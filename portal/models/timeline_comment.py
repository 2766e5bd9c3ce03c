# portal/models/timeline_comment.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.models.actor import ActorKind
from portal.models.base import Base, utcnow


class TimelineComment(Base):
    __tablename__ = "timeline_comments"
    __table_args__ = (
        Index("ix_timeline_comments_deliverable_timestamp", "deliverable_id", "timestamp"),
        Index("ix_timeline_comments_parent", "parent_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    deliverable_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("deliverables.id", ondelete="CASCADE"),
        nullable=False,
    )

    # One level of threading. No ON DELETE: replies must be removed before the parent.
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("timeline_comments.id"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[float] = mapped_column(Float, nullable=False)

    author_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    author_type: Mapped[str] = mapped_column(String(16), nullable=False, default=ActorKind.user.value)

    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

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

    # passive_deletes="all": the ORM must never null out parent_id on its own
    replies: Mapped[list["TimelineComment"]] = relationship(
        "TimelineComment",
        order_by="TimelineComment.created_at",
        lazy="selectin",
        passive_deletes="all",
    )
