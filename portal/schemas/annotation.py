# portal/schemas/annotation.py

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class AnnotationCreate(BaseModel):
    type: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="Marker type drawn in the player overlay.",
        examples=["point", "rect", "arrow"],
    )
    coordinates: dict[str, Any] | list[Any] = Field(
        ...,
        description="Shape payload; stored as-is.",
        examples=[{"x": 0.42, "y": 0.18}],
    )
    # required, but 0 is a valid value (first frame)
    timestamp: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Seconds into the media.",
        examples=[12.5, 0],
    )
    color: str | None = Field(
        default=None,
        max_length=16,
        description="Hex color; brand default when omitted.",
        examples=["#ff006e"],
    )
    comment: str | None = Field(default=None, max_length=5000)

    model_config = {"extra": "forbid"}


class AnnotationRead(BaseModel):
    id: UUID
    deliverable_id: UUID

    type: str
    color: str
    coordinates: dict[str, Any] | list[Any]
    timestamp: float
    comment: str

    author_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}
