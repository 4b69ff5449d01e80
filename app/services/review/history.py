"""Status history recorder.

Appends one ResourceStatusHistory row per persisted status transition.
Recording is best-effort: a failed append is logged and never undoes
the status change that triggered it.
"""

import uuid

from app.core.logging import get_logger
from app.models.resource import ResourceStatus
from app.models.status_history import ResourceStatusHistory
from app.repositories.resource_repository import ResourceRepository

logger = get_logger(__name__)


class StatusHistoryRecorder:
    """Record resource status transitions.

    Example:
        >>> recorder = StatusHistoryRecorder(repository)
        >>> await recorder.record(resource.id, old, new, actor_id)
    """

    def __init__(self, repository: ResourceRepository) -> None:
        """Initialize recorder.

        Args:
            repository: Storage adapter
        """
        self.repository = repository

    async def record(
        self,
        resource_id: uuid.UUID,
        old_status: ResourceStatus,
        new_status: ResourceStatus,
        actor_id: uuid.UUID | None,
    ) -> bool:
        """Append a history entry for a transition.

        Args:
            resource_id: Resource whose status changed
            old_status: Previous status
            new_status: New status
            actor_id: Actor who caused the change

        Returns:
            True if an entry was stored, False for no-op or failure
        """
        if old_status == new_status:
            return False

        entry = ResourceStatusHistory(
            resource_id=resource_id,
            old_status=ResourceStatus(old_status),
            new_status=ResourceStatus(new_status),
            changed_by=actor_id,
        )

        try:
            await self.repository.insert_history_entry(entry)
        except Exception as e:
            logger.error(
                "Failed to record status history",
                resource_id=str(resource_id),
                old_status=str(old_status),
                new_status=str(new_status),
                error=str(e),
                exc_info=True,
            )
            return False

        logger.debug(
            "Status history recorded",
            resource_id=str(resource_id),
            old_status=ResourceStatus(old_status).value,
            new_status=ResourceStatus(new_status).value,
        )
        return True


__all__ = ["StatusHistoryRecorder"]
