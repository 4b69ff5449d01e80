"""Request and response models for the HTTP API."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.resource import ResourceCategory, ResourceStatus
from app.models.review import ReviewDecision


class ReviewCreate(BaseModel):
    """Review decision submitted by a reviewer."""

    resource_id: uuid.UUID
    decision: ReviewDecision
    comment_summary: str | None = Field(default=None, max_length=5000)
    reviewer_role_id: uuid.UUID | None = None


class ReviewResponse(BaseModel):
    """Stored review decision."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    resource_id: uuid.UUID
    reviewer_id: uuid.UUID
    reviewer_role_id: uuid.UUID | None = None
    decision: ReviewDecision
    comment_summary: str | None = None
    reviewed_at: datetime | None = None


class ReviewOutcomeResponse(BaseModel):
    """Review decision together with the status it produced."""

    review: ReviewResponse
    old_status: ResourceStatus
    new_status: ResourceStatus
    publication_dispatched: bool


class StatusHistoryResponse(BaseModel):
    """One recorded status transition."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    resource_id: uuid.UUID
    old_status: ResourceStatus
    new_status: ResourceStatus
    changed_by: uuid.UUID | None = None
    changed_at: datetime | None = None


class ResourceUpdate(BaseModel):
    """Partial resource edit.

    Only fields that are sent are applied. An explicit null clears an
    optional field; required fields cannot be cleared.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    category: ResourceCategory | None = None
    slug: str | None = Field(default=None, max_length=255)
    summary: str | None = None
    subjects: list[str] | None = None
    grade_levels: list[str] | None = None
    drive_link: str | None = Field(default=None, max_length=500)
    status: ResourceStatus | None = None

    @field_validator("title", "category")
    @classmethod
    def reject_null(cls, v: object) -> object:
        """Refuse null for columns that must keep a value."""
        if v is None:
            raise ValueError("cannot be null")
        return v


class ResourceResponse(BaseModel):
    """Resource as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    category: ResourceCategory
    slug: str | None = None
    summary: str | None = None
    subjects: list[str] | None = None
    grade_levels: list[str] | None = None
    drive_link: str | None = None
    status: ResourceStatus
    published_url: str | None = None
    contributor_id: uuid.UUID


__all__ = [
    "ResourceResponse",
    "ResourceUpdate",
    "ReviewCreate",
    "ReviewOutcomeResponse",
    "ReviewResponse",
    "StatusHistoryResponse",
]
