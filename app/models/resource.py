"""Resource ORM model.

This module defines the Resource model for contributed educational items
that move through the review lifecycle and, for videos, get published.
"""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.review import ResourceReview
    from app.models.status_history import ResourceStatusHistory
    from app.models.video_metadata import VideoMetadata


class ResourceStatus(str, enum.Enum):
    """Resource review lifecycle status."""

    SUBMITTED = "Submitted"  # Created by a contributor
    UNDER_REVIEW = "UnderReview"  # Waiting on a reviewer
    NEEDS_REVISION = "NeedsRevision"  # Reviewer asked for changes
    APPROVED = "Approved"  # Accepted by a reviewer
    PUBLISHED = "Published"  # Live at the destination (terminal)


class ResourceCategory(str, enum.Enum):
    """Kind of educational resource."""

    LESSON_PLAN = "LessonPlan"
    VIDEO = "Video"
    WORKSHEET = "Worksheet"
    PRESENTATION = "Presentation"
    ASSESSMENT = "Assessment"
    ACTIVITY = "Activity"


class Resource(Base, UUIDMixin, TimestampMixin):
    """Contributed educational resource.

    Attributes:
        title: Display title
        category: Resource category (only Video resources are published)
        slug: Optional URL slug
        summary: Free-text summary, used as the default video description
        subjects: Subject tags
        grade_levels: Target grade levels
        drive_link: Google Drive share link to the source content
        status: Current review lifecycle status
        published_url: Public URL, set once status reaches Published
        contributor_id: Owning contributor
        reviews: Review decisions recorded against this resource
        status_history: Audit trail of status transitions
        video_metadata: Optional publication overrides
    """

    __tablename__ = "resources"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[ResourceCategory] = mapped_column(String(50), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(255), unique=True)
    summary: Mapped[str | None] = mapped_column(Text)
    subjects: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    grade_levels: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    drive_link: Mapped[str | None] = mapped_column(String(500))

    status: Mapped[ResourceStatus] = mapped_column(
        String(30), nullable=False, default=ResourceStatus.SUBMITTED
    )
    published_url: Mapped[str | None] = mapped_column(String(500))

    contributor_id: Mapped[uuid.UUID] = mapped_column(nullable=False, index=True)

    # Relationships
    reviews: Mapped[list["ResourceReview"]] = relationship(
        "ResourceReview", back_populates="resource", cascade="all, delete-orphan"
    )
    status_history: Mapped[list["ResourceStatusHistory"]] = relationship(
        "ResourceStatusHistory", back_populates="resource", cascade="all, delete-orphan"
    )
    video_metadata: Mapped["VideoMetadata | None"] = relationship(
        "VideoMetadata", back_populates="resource", uselist=False, cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_resource_status", "status"),
        Index("idx_resource_category", "category"),
    )

    @property
    def is_video(self) -> bool:
        """Check if this resource is eligible for video publication."""
        return self.category == ResourceCategory.VIDEO

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Resource(id={self.id}, title={self.title!r}, "
            f"category={self.category}, status={self.status})>"
        )


__all__ = [
    "Resource",
    "ResourceCategory",
    "ResourceStatus",
]
