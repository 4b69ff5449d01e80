"""Publication reconciler.

Applies the outcome of a finished upload to the live resource row.
"""

import uuid

from app.core.logging import get_logger
from app.models.resource import ResourceStatus
from app.repositories.resource_repository import ResourceRepository
from app.services.review.history import StatusHistoryRecorder

logger = get_logger(__name__)


class PublicationReconciler:
    """Mark a resource as published after a successful upload.

    The row is re-read at completion time, so fields edited while the
    upload was running are kept. Only ``published_url`` and ``status``
    are overwritten.
    """

    def __init__(
        self,
        repository: ResourceRepository,
        recorder: StatusHistoryRecorder | None = None,
    ) -> None:
        self.repository = repository
        self.recorder = recorder

    async def reconcile(
        self,
        resource_id: uuid.UUID,
        published_url: str,
        actor_id: uuid.UUID | None = None,
    ) -> bool:
        """Store the published URL and the terminal status.

        Args:
            resource_id: Published resource
            published_url: Public watch URL
            actor_id: Actor whose approval triggered the publication

        Returns:
            True if the resource row now reflects the publication
        """
        try:
            resource = await self.repository.get_resource(resource_id)
        except Exception as e:
            logger.error(
                "Failed to reload resource after upload",
                resource_id=str(resource_id),
                published_url=published_url,
                error=str(e),
                exc_info=True,
            )
            return False

        old_status = resource.status
        resource.published_url = published_url
        resource.status = ResourceStatus.PUBLISHED

        try:
            await self.repository.update_resource(resource)
        except Exception as e:
            # Content is live at the destination but the record does not say so
            logger.critical(
                "Published video not recorded on resource",
                resource_id=str(resource_id),
                published_url=published_url,
                error=str(e),
                exc_info=True,
            )
            return False

        if self.recorder is not None:
            await self.recorder.record(resource_id, old_status, ResourceStatus.PUBLISHED, actor_id)

        logger.info(
            "Resource published",
            resource_id=str(resource_id),
            old_status=str(old_status),
            published_url=published_url,
        )
        return True


__all__ = ["PublicationReconciler"]
