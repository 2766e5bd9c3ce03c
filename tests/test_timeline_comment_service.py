"""
Threading invariants of timeline comments at the service/DB level.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from portal.models.actor import ActorKind, ActorRef
from portal.models.timeline_comment import TimelineComment
from portal.services.errors import InvalidReviewInput, NotFound
from portal.services.timeline_comment_service import TimelineCommentService

from tests.factories import make_comment, make_deliverable


def _actor(kind: ActorKind = ActorKind.user) -> ActorRef:
    return ActorRef(kind=kind, id=uuid.uuid4())


def test_parent_cannot_be_deleted_before_its_replies(db):
    """The FK has no ON DELETE action: deleting the parent first must fail."""
    d = make_deliverable(db)
    top = make_comment(db, deliverable_id=d.id)
    make_comment(db, deliverable_id=d.id, parent_id=top.id)

    with pytest.raises(IntegrityError):
        with db.begin_nested():
            db.execute(delete(TimelineComment).where(TimelineComment.id == top.id))


def test_delete_comment_returns_reply_count(db):
    d = make_deliverable(db)
    top = make_comment(db, deliverable_id=d.id)
    for _ in range(3):
        make_comment(db, deliverable_id=d.id, parent_id=top.id)

    removed = TimelineCommentService(db).delete_comment(deliverable_id=d.id, comment_id=top.id, actor=_actor())

    assert removed == 3
    rows = db.execute(select(TimelineComment).where(TimelineComment.deliverable_id == d.id)).scalars().all()
    assert rows == []


def test_delete_only_touches_own_thread(db):
    d = make_deliverable(db)
    a = make_comment(db, deliverable_id=d.id, timestamp=1.0)
    b = make_comment(db, deliverable_id=d.id, timestamp=2.0)
    b_reply = make_comment(db, deliverable_id=d.id, parent_id=b.id)
    make_comment(db, deliverable_id=d.id, parent_id=a.id)

    TimelineCommentService(db).delete_comment(deliverable_id=d.id, comment_id=a.id, actor=_actor())

    ids = set(db.execute(select(TimelineComment.id).where(TimelineComment.deliverable_id == d.id)).scalars())
    assert ids == {b.id, b_reply.id}


def test_reply_inherits_nothing_but_parent_link(db):
    d = make_deliverable(db)
    top = make_comment(db, deliverable_id=d.id, timestamp=7.0)
    actor = _actor(ActorKind.client)

    reply = TimelineCommentService(db).create_comment(
        deliverable_id=d.id, content="ok", timestamp=7.5, parent_id=top.id, actor=actor
    )

    assert reply.parent_id == top.id
    assert reply.timestamp == 7.5
    assert reply.author_id == actor.id
    assert reply.author_type == "CLIENT"
    assert reply.resolved is False


def test_create_rejects_reply_to_reply(db):
    d = make_deliverable(db)
    top = make_comment(db, deliverable_id=d.id)
    reply = make_comment(db, deliverable_id=d.id, parent_id=top.id)

    with pytest.raises(InvalidReviewInput):
        TimelineCommentService(db).create_comment(
            deliverable_id=d.id, content="x", timestamp=1.0, parent_id=reply.id, actor=_actor()
        )


def test_create_on_missing_deliverable(db):
    with pytest.raises(NotFound):
        TimelineCommentService(db).create_comment(
            deliverable_id=uuid.uuid4(), content="x", timestamp=1.0, parent_id=None, actor=_actor()
        )


def test_update_through_other_deliverable_is_not_found(db):
    d = make_deliverable(db)
    other = make_deliverable(db)
    c = make_comment(db, deliverable_id=d.id)

    with pytest.raises(NotFound):
        TimelineCommentService(db).update_comment(
            deliverable_id=other.id, comment_id=c.id, resolved=True, actor=_actor()
        )
    assert c.resolved is False
