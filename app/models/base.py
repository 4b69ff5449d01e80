"""Base model mixins.

Column mixins shared by the workflow models:
- UUIDMixin: client-generated UUID primary key
- TimestampMixin: server-maintained created_at / updated_at
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.core.database import Base


class UUIDMixin:
    """UUID primary key, generated on flush.

    Example:
        >>> class Resource(Base, UUIDMixin, TimestampMixin):
        ...     __tablename__ = "resources"
        ...     title: Mapped[str]
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(primary_key=True, default=uuid.uuid4, index=True)


class TimestampMixin:
    """Creation and last-update timestamps set by the database.

    Append-only tables (reviews, status history) carry their own single
    timestamp instead of this mixin.
    """

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """When the row was inserted."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        )

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        """When the row was last written."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            onupdate=func.now(),
        )


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
]
