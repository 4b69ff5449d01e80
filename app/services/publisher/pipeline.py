"""Streaming publication pipeline.

This module provides the PublicationPipeline that moves an approved Video
resource from its Google Drive source to YouTube. The file is streamed
straight from the Drive download into the resumable upload; it is never
written to disk and never fully held in memory.
"""

import asyncio
import uuid
from contextlib import aclosing
from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.config.publication import PublicationConfig
from app.core.exceptions import RecordNotFoundError, SourceLinkError
from app.core.logging import get_logger, log_context
from app.infrastructure.drive_api import DriveAPIClient, extract_drive_file_id
from app.infrastructure.youtube_api import UploadMetadata, UploadResult, YouTubeAPIClient
from app.repositories.resource_repository import ResourceRepository
from app.services.publisher.metadata import (
    PublicationOverrides,
    ResourceSnapshot,
    resolve_metadata,
)
from app.services.publisher.reconciler import PublicationReconciler
from app.services.publisher.streaming import ByteChannel, ChannelMediaUpload, pump_source

logger = get_logger(__name__)


@dataclass
class PublicationResult:
    """Result of a successful publication.

    Attributes:
        resource_id: Published resource
        video_id: YouTube video ID
        published_url: Public watch URL
        bytes_uploaded: Number of bytes streamed to YouTube
        reconciled: Whether the resource row was updated
        started_at: Pipeline start time
        completed_at: Pipeline completion time
    """

    resource_id: uuid.UUID
    video_id: str
    published_url: str
    bytes_uploaded: int = 0
    reconciled: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    completed_at: datetime | None = None


class PublicationPipeline:
    """Publish an approved Video resource to YouTube.

    Failures never propagate: every abort ends in a log record keyed by
    ``resource_id`` and a ``None`` result. Nothing is retried.

    Example:
        >>> pipeline = PublicationPipeline(
        ...     drive_api=drive_client,
        ...     youtube_api=youtube_client,
        ...     repository=repository,
        ...     reconciler=reconciler,
        ... )
        >>> result = await pipeline.publish(snapshot)
    """

    def __init__(
        self,
        drive_api: DriveAPIClient,
        youtube_api: YouTubeAPIClient,
        repository: ResourceRepository,
        reconciler: PublicationReconciler,
        config: PublicationConfig | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            drive_api: Source store client
            youtube_api: Destination client
            repository: Storage adapter (override lookup)
            reconciler: Applies the result to the resource row
            config: Publication settings
        """
        self.drive_api = drive_api
        self.youtube_api = youtube_api
        self.repository = repository
        self.reconciler = reconciler
        self.config = config or PublicationConfig()

    async def publish(self, snapshot: ResourceSnapshot) -> PublicationResult | None:
        """Stream a resource's source video to YouTube and record the URL.

        Args:
            snapshot: Resource fields captured when approval was recorded

        Returns:
            PublicationResult, or None if publication was skipped or failed
        """
        with log_context(resource_id=snapshot.resource_id):
            return await self._publish(snapshot)

    async def _publish(self, snapshot: ResourceSnapshot) -> PublicationResult | None:
        resource_id = str(snapshot.resource_id)

        if not snapshot.drive_link:
            logger.warning("Skipping publication, resource has no source link", resource_id=resource_id)
            return None

        if not snapshot.is_video:
            logger.warning(
                "Skipping publication, resource is not a video",
                resource_id=resource_id,
                category=str(snapshot.category),
            )
            return None

        try:
            file_id = extract_drive_file_id(snapshot.drive_link)
        except SourceLinkError as e:
            logger.error("Publication aborted", resource_id=resource_id, error=str(e))
            return None

        started_at = datetime.now(tz=UTC)
        logger.info("Publication started", resource_id=resource_id, file_id=file_id)

        try:
            async with asyncio.timeout(self.config.upload_timeout_seconds):
                upload, bytes_uploaded = await self._transfer(snapshot, file_id)
        except TimeoutError:
            logger.error(
                "Publication timed out",
                resource_id=resource_id,
                file_id=file_id,
                timeout_seconds=self.config.upload_timeout_seconds,
            )
            return None
        except Exception as e:
            logger.error(
                "Publication failed",
                resource_id=resource_id,
                file_id=file_id,
                error_type=type(e).__name__,
                error=str(e),
                exc_info=True,
            )
            return None

        reconciled = await self.reconciler.reconcile(
            snapshot.resource_id, upload.url, snapshot.approved_by
        )

        completed_at = datetime.now(tz=UTC)
        logger.info(
            "Publication completed",
            resource_id=resource_id,
            video_id=upload.video_id,
            published_url=upload.url,
            bytes_uploaded=bytes_uploaded,
            reconciled=reconciled,
            duration_seconds=f"{(completed_at - started_at).total_seconds():.1f}",
        )

        return PublicationResult(
            resource_id=snapshot.resource_id,
            video_id=upload.video_id,
            published_url=upload.url,
            bytes_uploaded=bytes_uploaded,
            reconciled=reconciled,
            started_at=started_at,
            completed_at=completed_at,
        )

    async def _transfer(self, snapshot: ResourceSnapshot, file_id: str) -> tuple[UploadResult, int]:
        """Run the producer/consumer bridge for one file.

        Returns:
            Upload result and the number of bytes streamed
        """
        resource_id = str(snapshot.resource_id)

        source = await self.drive_api.get_file_metadata(file_id)
        mime_type = source.mime_type or self.config.default_mime_type
        logger.debug(
            "Source file resolved",
            resource_id=resource_id,
            file_name=source.name,
            mime_type=mime_type,
        )

        metadata = await self._resolve_metadata(snapshot)

        channel = ByteChannel(
            max_chunks=self.config.channel_max_chunks,
            timeout=self.config.source_timeout_seconds,
        )
        media = ChannelMediaUpload(channel, mime_type, self.config.upload_chunk_size)
        producer = asyncio.create_task(self._produce(file_id, channel))

        try:
            upload = await self.youtube_api.upload_stream(media, metadata, resource_id=resource_id)
        except BaseException:
            channel.abort()
            producer.cancel()
            await asyncio.gather(producer, return_exceptions=True)
            raise

        bytes_uploaded = await producer
        return upload, bytes_uploaded

    async def _produce(self, file_id: str, channel: ByteChannel) -> int:
        async with aclosing(
            self.drive_api.iter_file(file_id, self.config.source_read_chunk_size)
        ) as chunks:
            return await pump_source(chunks, channel)

    async def _resolve_metadata(self, snapshot: ResourceSnapshot) -> UploadMetadata:
        """Resolve upload metadata, falling back to defaults on lookup failure."""
        resource_id = str(snapshot.resource_id)
        overrides: PublicationOverrides | None = None

        try:
            row = await self.repository.get_publication_overrides(snapshot.resource_id)
            overrides = PublicationOverrides.from_model(row)
        except RecordNotFoundError:
            logger.warning("No publication overrides, using defaults", resource_id=resource_id)
        except Exception as e:
            logger.warning(
                "Failed to load publication overrides, using defaults",
                resource_id=resource_id,
                error=str(e),
            )

        return resolve_metadata(snapshot, overrides, self.config)


__all__ = [
    "PublicationPipeline",
    "PublicationResult",
]
