"""YouTube Data API client.

This module provides a high-level client for YouTube video uploads
(resumable, from a streaming media source) and status lookups.
"""

import asyncio
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from googleapiclient.errors import Error as GoogleAPIClientError
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaUpload

from app.core.exceptions import (
    PublicationError,
    QuotaExceededError,
    YouTubeAPIError,
)
from app.core.logging import get_logger
from app.infrastructure.google_auth import GoogleAuthClient

logger = get_logger(__name__)

# Retriable HTTP status codes
RETRIABLE_STATUS_CODES = [500, 502, 503, 504]

# Maximum retry attempts per chunk
MAX_RETRIES = 3

WATCH_URL_BASE = "https://www.youtube.com/watch?v="


@dataclass
class UploadMetadata:
    """Metadata for YouTube video upload.

    Attributes:
        title: Video title (max 100 chars)
        description: Video description (max 5000 chars)
        tags: List of video tags
        category_id: YouTube category ID
        privacy_status: Privacy setting (public, private, unlisted)
        made_for_kids: Whether content is made for kids
    """

    title: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    category_id: str = "27"  # Education
    privacy_status: str = "unlisted"
    made_for_kids: bool = False


@dataclass
class UploadResult:
    """Result of video upload operation.

    Attributes:
        video_id: YouTube video ID
        url: Public watch URL
        status: Upload status
        privacy_status: Privacy status reported by YouTube
        uploaded_at: Upload timestamp
    """

    video_id: str
    url: str
    status: str
    privacy_status: str
    uploaded_at: datetime


class YouTubeAPIClient:
    """YouTube Data API client.

    Uploads use the resumable protocol: the media source is read one
    chunk at a time, so the client works with sources of unknown length.

    Example:
        >>> auth = GoogleAuthClient(client_id, client_secret, refresh_token)
        >>> client = YouTubeAPIClient(auth)
        >>> result = await client.upload_stream(media, UploadMetadata(title="Fractions"))
        >>> print(f"Uploaded: {result.url}")
    """

    def __init__(
        self,
        auth_client: GoogleAuthClient,
        max_retries: int = MAX_RETRIES,
        watch_url_base: str = WATCH_URL_BASE,
    ) -> None:
        """Initialize YouTube API client.

        Args:
            auth_client: Google auth client
            max_retries: Maximum retry attempts for a failed chunk
            watch_url_base: Prefix of the public watch URL
        """
        self.auth_client = auth_client
        self.max_retries = max_retries
        self.watch_url_base = watch_url_base

        logger.info("YouTubeAPIClient initialized", max_retries=max_retries)

    def _build_video_body(self, metadata: UploadMetadata) -> dict[str, Any]:
        """Build request body for video insert.

        Args:
            metadata: Video metadata

        Returns:
            Request body dictionary
        """
        body: dict[str, Any] = {
            "snippet": {
                "title": metadata.title[:100],  # YouTube limit
                "description": metadata.description[:5000],  # YouTube limit
                "categoryId": metadata.category_id,
            },
            "status": {
                "privacyStatus": metadata.privacy_status,
                "selfDeclaredMadeForKids": metadata.made_for_kids,
            },
        }

        if metadata.tags:
            body["snippet"]["tags"] = metadata.tags[:500]  # YouTube limit

        return body

    def watch_url(self, video_id: str) -> str:
        """Build the public watch URL of a video."""
        return f"{self.watch_url_base}{video_id}"

    async def upload_stream(
        self,
        media: MediaUpload,
        metadata: UploadMetadata,
        resource_id: str | None = None,
    ) -> UploadResult:
        """Upload a video from a streaming media source.

        Each chunk is sent as soon as the media source yields it. A chunk
        rejected with a transient error is resent from the last offset
        the server acknowledged, within the same upload session.

        Args:
            media: Resumable media source (size may be unknown)
            metadata: Video metadata
            resource_id: Resource being published, for logs and errors

        Returns:
            UploadResult with video ID and URL

        Raises:
            YouTubeAPIError: If upload fails
            QuotaExceededError: If API quota is exceeded
            PublicationError: If the media source fails mid-upload
        """
        youtube = await self.auth_client.get_youtube_service()

        body = self._build_video_body(metadata)

        try:
            request = youtube.videos().insert(
                part="snippet,status",
                body=body,
                media_body=media,
            )
        except GoogleAPIClientError as e:
            raise YouTubeAPIError(
                message=f"Upload request rejected: {e}",
                error_code="INVALID_MEDIA",
                resource_id=resource_id,
            ) from e

        logger.info(
            "Starting video upload",
            resource_id=resource_id,
            title=metadata.title,
            mime_type=media.mimetype(),
            chunk_size=media.chunksize(),
        )

        response = None
        retry_count = 0
        start_time = time.time()

        while response is None:
            try:
                status, response = await asyncio.to_thread(request.next_chunk)
                if status:
                    logger.debug(
                        "Upload progress",
                        resource_id=resource_id,
                        bytes_sent=status.resumable_progress,
                    )
                retry_count = 0

            except PublicationError:
                raise

            except HttpError as e:
                if e.resp.status == 403 and "quotaExceeded" in str(e):
                    raise QuotaExceededError(
                        message="YouTube API quota exceeded",
                        context={"resource_id": resource_id},
                    ) from e

                if e.resp.status in RETRIABLE_STATUS_CODES and retry_count < self.max_retries:
                    retry_count += 1
                    wait_time = 2**retry_count
                    logger.warning(
                        "Retrying upload chunk",
                        resource_id=resource_id,
                        status=e.resp.status,
                        retry=retry_count,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                else:
                    raise YouTubeAPIError(
                        message=f"Upload failed: {e}",
                        error_code=str(e.resp.status),
                        error_reason=str(e.content),
                        resource_id=resource_id,
                    ) from e

            except OSError as e:
                if retry_count < self.max_retries:
                    retry_count += 1
                    wait_time = 2**retry_count
                    logger.warning(
                        "Retrying upload chunk on transport error",
                        resource_id=resource_id,
                        error=str(e),
                        retry=retry_count,
                    )
                    await asyncio.sleep(wait_time)
                else:
                    raise YouTubeAPIError(
                        message=f"Upload failed: {e}",
                        resource_id=resource_id,
                    ) from e

        video_id = response["id"]
        upload_time = time.time() - start_time

        logger.info(
            "Video uploaded successfully",
            resource_id=resource_id,
            video_id=video_id,
            upload_time_seconds=f"{upload_time:.1f}",
        )

        return UploadResult(
            video_id=video_id,
            url=self.watch_url(video_id),
            status=response.get("status", {}).get("uploadStatus", "unknown"),
            privacy_status=response.get("status", {}).get("privacyStatus", "unknown"),
            uploaded_at=datetime.now(tz=UTC),
        )


__all__ = [
    "UploadMetadata",
    "UploadResult",
    "YouTubeAPIClient",
]
