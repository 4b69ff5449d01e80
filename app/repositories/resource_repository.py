"""Storage adapter for resources, reviews, status history and video metadata.

Every method opens its own short-lived session from the injected factory,
so callers never hold a session (or a row lock) across network I/O.
"""

import uuid
from collections.abc import Sequence

from sqlalchemy import select

from app.core.exceptions import RecordNotFoundError
from app.core.logging import get_logger
from app.core.database import SessionFactory
from app.models.resource import Resource
from app.models.review import ResourceReview
from app.models.status_history import ResourceStatusHistory
from app.models.video_metadata import VideoMetadata

logger = get_logger(__name__)


class ResourceRepository:
    """CRUD operations used by the review and publication workflow.

    Example:
        >>> repo = ResourceRepository(db_session_factory)
        >>> resource = await repo.get_resource(resource_id)
        >>> resource.title = "New title"
        >>> await repo.update_resource(resource)
    """

    def __init__(self, db_session_factory: SessionFactory) -> None:
        """Initialize repository.

        Args:
            db_session_factory: Async session factory
        """
        self.db_session_factory = db_session_factory

    async def get_resource(self, resource_id: uuid.UUID) -> Resource:
        """Load a resource row.

        Args:
            resource_id: Resource ID

        Returns:
            Detached Resource instance

        Raises:
            RecordNotFoundError: If no such resource exists
        """
        async with self.db_session_factory() as session:
            resource = await session.get(Resource, resource_id)
            if resource is None:
                raise RecordNotFoundError(model="Resource", record_id=str(resource_id))
            return resource

    async def update_resource(self, resource: Resource) -> Resource:
        """Persist all column values of a (possibly detached) resource.

        Args:
            resource: Resource carrying the values to store

        Returns:
            The persisted Resource

        Raises:
            RecordNotFoundError: If the resource was deleted meanwhile
        """
        async with self.db_session_factory() as session:
            existing = await session.get(Resource, resource.id)
            if existing is None:
                raise RecordNotFoundError(model="Resource", record_id=str(resource.id))
            merged = await session.merge(resource)
            await session.commit()
            return merged

    async def insert_review(self, review: ResourceReview) -> ResourceReview:
        """Insert a review decision.

        Args:
            review: New review row

        Returns:
            The stored review with ID and timestamp populated
        """
        async with self.db_session_factory() as session:
            session.add(review)
            await session.commit()
            await session.refresh(review)
            return review

    async def list_reviews(self, resource_id: uuid.UUID) -> Sequence[ResourceReview]:
        """List reviews of a resource, newest first.

        Args:
            resource_id: Resource ID

        Returns:
            Reviews ordered by reviewed_at descending
        """
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(ResourceReview)
                .where(ResourceReview.resource_id == resource_id)
                .order_by(ResourceReview.reviewed_at.desc())
            )
            return result.scalars().all()

    async def get_publication_overrides(self, resource_id: uuid.UUID) -> VideoMetadata:
        """Load the publication overrides of a resource.

        Args:
            resource_id: Resource ID

        Returns:
            VideoMetadata row

        Raises:
            RecordNotFoundError: If the resource has no overrides
        """
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(VideoMetadata).where(VideoMetadata.resource_id == resource_id)
            )
            metadata = result.scalar_one_or_none()
            if metadata is None:
                raise RecordNotFoundError(model="VideoMetadata", record_id=str(resource_id))
            return metadata

    async def insert_history_entry(self, entry: ResourceStatusHistory) -> ResourceStatusHistory:
        """Append a status history entry.

        Args:
            entry: New history row

        Returns:
            The stored entry
        """
        async with self.db_session_factory() as session:
            session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return entry

    async def list_status_history(
        self, resource_id: uuid.UUID
    ) -> Sequence[ResourceStatusHistory]:
        """List status transitions of a resource, oldest first.

        Args:
            resource_id: Resource ID

        Returns:
            History entries ordered by changed_at ascending
        """
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(ResourceStatusHistory)
                .where(ResourceStatusHistory.resource_id == resource_id)
                .order_by(ResourceStatusHistory.changed_at.asc())
            )
            return result.scalars().all()


__all__ = ["ResourceRepository"]
