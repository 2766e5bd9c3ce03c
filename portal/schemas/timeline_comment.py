# portal/schemas/timeline_comment.py

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from portal.models.actor import ActorKind


class TimelineCommentCreate(BaseModel):
    content: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        examples=["Can we hold this frame a bit longer?"],
    )
    timestamp: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Seconds into the media. 0 is valid.",
        examples=[3.2],
    )
    parent_id: UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_id", "parentId"),
        description="Top-level comment this is a reply to. Replies cannot be replied to.",
    )

    # author is taken from the session, never from the body
    model_config = {"extra": "forbid"}


class TimelineCommentUpdate(BaseModel):
    resolved: bool | None = None
    content: str | None = Field(default=None, min_length=1, max_length=5000)

    model_config = {"extra": "forbid"}


class TimelineReplyRead(BaseModel):
    id: UUID
    deliverable_id: UUID
    parent_id: UUID | None = None

    content: str
    timestamp: float

    author_id: UUID
    author_type: ActorKind
    resolved: bool

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TimelineCommentRead(TimelineReplyRead):
    replies: list[TimelineReplyRead] = []
