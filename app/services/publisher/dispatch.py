"""Background dispatch of publication runs.

The approval path hands a snapshot to a dispatcher and returns at once;
the publication outcome is never awaited by the request that caused it.
"""

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from app.core.config import Config
from app.core.logging import get_logger
from app.services.publisher.metadata import ResourceSnapshot

if TYPE_CHECKING:
    from app.services.publisher.pipeline import PublicationPipeline

logger = get_logger(__name__)

PUBLISH_TASK_NAME = "app.workers.publish.publish_resource"
PUBLISH_QUEUE = "publish"


class PublicationDispatcher(Protocol):
    """Launches a publication without waiting for it."""

    def dispatch(self, snapshot: ResourceSnapshot) -> None: ...


class CeleryPublicationDispatcher:
    """Queue publications on the Celery ``publish`` queue."""

    def __init__(self, queue: str = PUBLISH_QUEUE) -> None:
        self.queue = queue

    def dispatch(self, snapshot: ResourceSnapshot) -> None:
        from app.workers.celery_app import celery_app

        result = celery_app.send_task(
            PUBLISH_TASK_NAME,
            args=[snapshot.to_dict()],
            queue=self.queue,
        )
        logger.info(
            "Publication queued",
            resource_id=str(snapshot.resource_id),
            task_id=result.id,
            queue=self.queue,
        )


class InProcessPublicationDispatcher:
    """Run publications as detached tasks on the current event loop.

    Strong references to running tasks are held until they finish, so a
    publication cannot be garbage collected mid-flight.
    """

    def __init__(self, pipeline_factory: Callable[[], "PublicationPipeline"]) -> None:
        """Initialize dispatcher.

        Args:
            pipeline_factory: Builds the pipeline used for each publication
        """
        self.pipeline_factory = pipeline_factory
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of publications still running."""
        return len(self._tasks)

    def dispatch(self, snapshot: ResourceSnapshot) -> None:
        task = asyncio.create_task(
            self._run(snapshot), name=f"publish-{snapshot.resource_id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("Publication started in background", resource_id=str(snapshot.resource_id))

    async def _run(self, snapshot: ResourceSnapshot) -> None:
        try:
            pipeline = self.pipeline_factory()
            await pipeline.publish(snapshot)
        except Exception as e:
            logger.error(
                "Background publication crashed",
                resource_id=str(snapshot.resource_id),
                error=str(e),
                exc_info=True,
            )

    async def wait_idle(self) -> None:
        """Wait until every dispatched publication has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def build_publication_dispatcher(
    config: Config,
    pipeline_factory: Callable[[], "PublicationPipeline"],
) -> PublicationDispatcher | None:
    """Select the dispatcher for this deployment.

    Args:
        config: Application config
        pipeline_factory: Builds a PublicationPipeline (in-process backend)

    Returns:
        A dispatcher, or None when publication is unavailable
    """
    if not config.enable_auto_publish:
        logger.warning("Automatic publication disabled, approved videos will not be published")
        return None

    if not config.youtube_configured:
        logger.warning("YouTube credentials not configured, approved videos will not be published")
        return None

    if config.publication_backend == "inprocess":
        logger.info("Publication dispatcher ready", backend="inprocess")
        return InProcessPublicationDispatcher(pipeline_factory)

    logger.info("Publication dispatcher ready", backend="celery", queue=PUBLISH_QUEUE)
    return CeleryPublicationDispatcher()


__all__ = [
    "CeleryPublicationDispatcher",
    "InProcessPublicationDispatcher",
    "PUBLISH_QUEUE",
    "PUBLISH_TASK_NAME",
    "PublicationDispatcher",
    "build_publication_dispatcher",
]
