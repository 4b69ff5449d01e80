"""VideoMetadata ORM model.

Optional per-resource publication overrides. Read (never written) by the
publication pipeline; empty fields fall back to the resource defaults.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.resource import Resource


class VideoMetadata(Base, UUIDMixin, TimestampMixin):
    """Publication overrides for a Video resource.

    Attributes:
        resource_id: Foreign key to resources table (one-to-one)
        youtube_title: Override title
        youtube_description: Override description
        tags: Video tags
        privacy_status: public, private or unlisted
        made_for_kids: Audience restriction flag
        category_id: YouTube category code (0 means unset)
    """

    __tablename__ = "video_metadata"

    resource_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    youtube_title: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    youtube_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    privacy_status: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    made_for_kids: Mapped[bool] = mapped_column(nullable=False, default=False)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    resource: Mapped["Resource"] = relationship("Resource", back_populates="video_metadata")

    def __repr__(self) -> str:
        """String representation."""
        return f"<VideoMetadata(resource_id={self.resource_id}, title={self.youtube_title!r})>"


__all__ = ["VideoMetadata"]
