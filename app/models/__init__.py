"""SQLAlchemy ORM models.

Models for the resource review and publication workflow:
- Resource: contributed item with review lifecycle status
- ResourceReview: immutable reviewer decisions
- ResourceStatusHistory: append-only status audit trail
- VideoMetadata: optional publication overrides for Video resources
"""

from app.models.base import Base, TimestampMixin, UUIDMixin
from app.models.resource import Resource, ResourceCategory, ResourceStatus
from app.models.review import ResourceReview, ReviewDecision
from app.models.status_history import ResourceStatusHistory
from app.models.video_metadata import VideoMetadata

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "Resource",
    "ResourceCategory",
    "ResourceStatus",
    "ResourceReview",
    "ReviewDecision",
    "ResourceStatusHistory",
    "VideoMetadata",
]
