# portal/schemas/deliverable.py

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from portal.models.deliverable import DeliverableStatus


class DeliverableCreate(BaseModel):
    project_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("project_id", "projectId"),
        description="Project the deliverable belongs to.",
        examples=["22222222-2222-2222-2222-222222222222"],
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name, e.g. the cut or asset name.",
        examples=["Launch teaser 30s"],
    )
    description: str | None = Field(default=None, max_length=5000)

    file_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("file_url", "fileUrl"),
        description="Initial file (optional). Uploaded files normally arrive as versions.",
    )
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnail_url", "thumbnailUrl"),
    )

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "project_id": "22222222-2222-2222-2222-222222222222",
                    "name": "Launch teaser 30s",
                    "description": "Main cut for social",
                }
            ]
        },
    }


class DeliverableRead(BaseModel):
    id: UUID
    project_id: UUID

    name: str
    description: str | None = None
    status: DeliverableStatus

    version: int
    file_url: str | None = None
    thumbnail_url: str | None = None

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
