"""Publication Celery tasks.

This module defines the Celery task that streams an approved Video
resource from Google Drive to YouTube:
- publish_resource: Run the publication pipeline for one resource snapshot

Publication is never retried automatically; re-approval is the recovery path.
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from celery import shared_task
from celery.utils.log import get_task_logger
from pydantic import BaseModel

from app.core.container import ApplicationContainer, get_container
from app.core.database import close_db
from app.services.publisher.dispatch import PUBLISH_TASK_NAME
from app.services.publisher.metadata import ResourceSnapshot

logger = get_task_logger(__name__)

# Whole-task limits; the pipeline enforces its own upload timeout below these
PUBLISH_SOFT_TIME_LIMIT = 4 * 3600
PUBLISH_TIME_LIMIT = PUBLISH_SOFT_TIME_LIMIT + 300


class PublishTaskResult(BaseModel):
    """Result of publish task.

    Attributes:
        resource_id: Resource ID
        published: Whether the video reached YouTube
        video_id: YouTube video ID (if published)
        published_url: Watch URL (if published)
        reconciled: Whether the resource row was updated
        started_at: Task start time
        completed_at: Task completion time
    """

    resource_id: str
    published: bool = False
    video_id: str | None = None
    published_url: str | None = None
    reconciled: bool = False
    started_at: datetime
    completed_at: datetime | None = None


async def _release_loop_resources(container: ApplicationContainer) -> None:
    """Close clients bound to the event loop that is about to end.

    Each task runs in its own ``asyncio.run`` loop, so connection pools
    must not outlive it.
    """
    await container.infrastructure.http_client().close()
    await close_db()
    container.reset_singletons()


async def _publish_resource_async(snapshot_data: dict[str, Any]) -> PublishTaskResult:
    """Run the publication pipeline for a serialized snapshot.

    Args:
        snapshot_data: ResourceSnapshot.to_dict() payload

    Returns:
        PublishTaskResult
    """
    started_at = datetime.now(tz=UTC)
    snapshot = ResourceSnapshot.from_dict(snapshot_data)

    container = get_container()
    try:
        pipeline = container.services.publication_pipeline()
        result = await pipeline.publish(snapshot)
    finally:
        await _release_loop_resources(container)

    if result is None:
        return PublishTaskResult(
            resource_id=str(snapshot.resource_id),
            started_at=started_at,
            completed_at=datetime.now(tz=UTC),
        )

    return PublishTaskResult(
        resource_id=str(snapshot.resource_id),
        published=True,
        video_id=result.video_id,
        published_url=result.published_url,
        reconciled=result.reconciled,
        started_at=started_at,
        completed_at=datetime.now(tz=UTC),
    )


# =============================================================================
# Celery Tasks
# =============================================================================


@shared_task(
    bind=True,
    name=PUBLISH_TASK_NAME,
    max_retries=0,
    acks_late=False,
    soft_time_limit=PUBLISH_SOFT_TIME_LIMIT,
    time_limit=PUBLISH_TIME_LIMIT,
)
def publish_resource(self, snapshot_data: dict[str, Any]) -> dict[str, Any]:
    """Publish an approved Video resource to YouTube.

    Args:
        self: Celery task instance
        snapshot_data: Serialized ResourceSnapshot

    Returns:
        PublishTaskResult as dict
    """
    resource_id = snapshot_data.get("resource_id")
    logger.info(f"Starting publication for: {resource_id}")

    result = asyncio.run(_publish_resource_async(snapshot_data))

    if result.published:
        logger.info(f"Publication complete: {resource_id} -> {result.published_url}")
    else:
        logger.warning(f"Publication not completed for: {resource_id}")

    return result.model_dump(mode="json")


__all__ = [
    "PublishTaskResult",
    "publish_resource",
]
