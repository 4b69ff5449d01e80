"""ResourceStatusHistory ORM model.

Append-only audit trail: one row per observed status transition.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UUIDMixin
from app.models.resource import ResourceStatus

if TYPE_CHECKING:
    from app.models.resource import Resource


class ResourceStatusHistory(Base, UUIDMixin):
    """Recorded status transition of a resource.

    Attributes:
        resource_id: Resource whose status changed
        old_status: Status before the transition
        new_status: Status after the transition
        changed_by: Actor who caused the transition
        changed_at: When the transition was recorded
    """

    __tablename__ = "resource_status_history"

    resource_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True
    )
    old_status: Mapped[ResourceStatus] = mapped_column(String(30), nullable=False)
    new_status: Mapped[ResourceStatus] = mapped_column(String(30), nullable=False)
    changed_by: Mapped[uuid.UUID | None] = mapped_column()
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    resource: Mapped["Resource"] = relationship("Resource", back_populates="status_history")

    __table_args__ = (Index("idx_status_history_resource_changed", "resource_id", "changed_at"),)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ResourceStatusHistory(resource_id={self.resource_id}, "
            f"{self.old_status} -> {self.new_status})>"
        )


__all__ = ["ResourceStatusHistory"]
