# portal/services/timeline_comment_service.py
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.models.actor import ActorRef
from portal.models.timeline_comment import TimelineComment
from portal.services.deliverable_service import get_deliverable
from portal.services.errors import InvalidReviewInput, NotFound

logger = logging.getLogger(__name__)


class TimelineCommentService:
    """
    Timestamped discussion on a deliverable, threaded exactly one level deep:
    top-level comments carry `replies`, replies never have replies of their own.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get(self, deliverable_id: UUID, comment_id: UUID) -> TimelineComment:
        c = self.db.get(TimelineComment, comment_id)
        if c is None or c.deliverable_id != deliverable_id:
            raise NotFound("Timeline comment not found")
        return c

    def list_comments(self, deliverable_id: UUID) -> list[TimelineComment]:
        """Top-level comments by timestamp; replies (eager-loaded) by creation time."""
        return list(
            self.db.execute(
                select(TimelineComment)
                .where(
                    TimelineComment.deliverable_id == deliverable_id,
                    TimelineComment.parent_id.is_(None),
                )
                .order_by(TimelineComment.timestamp.asc(), TimelineComment.created_at.asc())
            ).scalars()
        )

    def create_comment(
        self,
        *,
        deliverable_id: UUID,
        content: str,
        timestamp: float | None,
        parent_id: UUID | None,
        actor: ActorRef,
    ) -> TimelineComment:
        if not content or timestamp is None:
            raise InvalidReviewInput("Content and timestamp are required")

        d = get_deliverable(self.db, deliverable_id)

        if parent_id is not None:
            parent = self.db.get(TimelineComment, parent_id)
            if parent is None:
                raise NotFound("Parent comment not found")
            if parent.deliverable_id != d.id:
                raise InvalidReviewInput("Parent comment belongs to another deliverable")
            if parent.parent_id is not None:
                raise InvalidReviewInput("Cannot reply to a reply")

        c = TimelineComment(
            deliverable_id=d.id,
            parent_id=parent_id,
            content=content,
            timestamp=float(timestamp),
            author_id=actor.id,
            author_type=actor.kind.value,
            resolved=False,
        )
        self.db.add(c)
        self.db.flush()

        logger.info(
            "timeline comment %s created%s",
            c.id,
            f" (reply to {parent_id})" if parent_id else "",
            extra={"deliverable_id": d.id, "actor_id": actor.id, "actor_kind": actor.kind.value},
        )
        return c

    def update_comment(
        self,
        *,
        deliverable_id: UUID,
        comment_id: UUID,
        resolved: bool | None = None,
        content: str | None = None,
        actor: ActorRef,
    ) -> TimelineComment:
        c = self._get(deliverable_id, comment_id)

        if resolved is not None:
            c.resolved = resolved
        if content:
            c.content = content

        self.db.flush()

        logger.info(
            "timeline comment %s updated",
            c.id,
            extra={"deliverable_id": deliverable_id, "actor_id": actor.id, "actor_kind": actor.kind.value},
        )
        return c

    def delete_comment(self, *, deliverable_id: UUID, comment_id: UUID, actor: ActorRef) -> int:
        """Delete a comment and its direct replies. Returns the number of replies removed.

        Order matters: parent_id has no ON DELETE action, so replies go first.
        """
        c = self._get(deliverable_id, comment_id)

        replies = list(c.replies)
        for r in replies:
            self.db.delete(r)
        self.db.flush()

        self.db.delete(c)
        self.db.flush()

        logger.info(
            "timeline comment %s deleted with %s replies",
            comment_id,
            len(replies),
            extra={"deliverable_id": deliverable_id, "actor_id": actor.id, "actor_kind": actor.kind.value},
        )
        return len(replies)
