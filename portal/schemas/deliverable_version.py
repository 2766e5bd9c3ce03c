# portal/schemas/deliverable_version.py

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field


class DeliverableVersionCreate(BaseModel):
    file_url: str = Field(
        ...,
        validation_alias=AliasChoices("file_url", "fileUrl"),
        min_length=1,
        description="Uploaded file location (storage provider URL).",
        examples=["https://drive.example.com/files/launch-teaser-v3.mp4"],
    )
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnail_url", "thumbnailUrl"),
        description="Poster frame for the player (optional).",
        examples=["https://drive.example.com/files/launch-teaser-v3.jpg"],
    )
    notes: str | None = Field(
        default=None,
        max_length=5000,
        description="What changed in this version (optional).",
        examples=["Colour grade pass, new end card"],
    )

    model_config = {"extra": "forbid"}


class DeliverableVersionRead(BaseModel):
    id: UUID
    deliverable_id: UUID

    version_number: int
    file_url: str
    thumbnail_url: str | None = None
    notes: str | None = None

    created_by: UUID
    created_at: datetime

    model_config = {"from_attributes": True}
