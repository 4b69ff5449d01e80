"""ResourceReview ORM model.

Reviews are immutable once created; a resource accumulates one row per
review decision across revision cycles.
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from app.models.resource import Resource


class ReviewDecision(str, enum.Enum):
    """Reviewer verdict."""

    APPROVED = "Approved"
    REJECTED = "Rejected"


class ResourceReview(Base, UUIDMixin):
    """Reviewer decision on a resource.

    Attributes:
        resource_id: Reviewed resource
        reviewer_id: Reviewer identity
        reviewer_role_id: Role the reviewer acted under
        decision: Approve or reject
        comment_summary: Free-text summary for the contributor
        reviewed_at: When the decision was recorded
    """

    __tablename__ = "resource_reviews"

    resource_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reviewer_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    reviewer_role_id: Mapped[uuid.UUID | None] = mapped_column()
    decision: Mapped[ReviewDecision] = mapped_column(String(20), nullable=False)
    comment_summary: Mapped[str | None] = mapped_column(Text)
    reviewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    resource: Mapped["Resource"] = relationship("Resource", back_populates="reviews")

    __table_args__ = (Index("idx_review_resource_reviewed", "resource_id", "reviewed_at"),)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ResourceReview(id={self.id}, resource_id={self.resource_id}, "
            f"decision={self.decision})>"
        )


__all__ = [
    "ResourceReview",
    "ReviewDecision",
]
