"""Video publication pipeline configuration models.

This module provides typed Pydantic configuration for publishing approved
Video resources:
- Destination defaults (category, privacy) applied when no override exists
- Streaming settings (chunk sizes, hand-off channel depth)
- Time limits for the source download and destination upload
"""

from typing import Literal

from pydantic import BaseModel, Field

MB = 1024 * 1024
KB = 1024


class PublicationConfig(BaseModel):
    """Configuration for streaming a Drive video to YouTube.

    Attributes:
        default_category_id: Default YouTube category ID (27=Education)
        default_privacy: Default privacy status for uploads
        default_mime_type: Content type used when the source reports none
        upload_chunk_size_mb: Resumable upload chunk size in MB
        source_read_chunk_kb: Size of byte chunks read from the source in KB
        channel_max_chunks: Maximum source chunks buffered between producer and consumer
        source_timeout_seconds: Max seconds either stream side may stall
        upload_timeout_seconds: Max seconds for a whole publication
        max_chunk_retries: Resume attempts for a single failed chunk within one session
        watch_url_base: Prefix for the public watch URL
    """

    default_category_id: str = Field(default="27", description="YouTube category (27=Education)")
    default_privacy: Literal["public", "private", "unlisted"] = Field(
        default="unlisted", description="Default privacy status"
    )
    default_mime_type: str = Field(default="video/mp4", description="Fallback content type")
    upload_chunk_size_mb: int = Field(default=8, ge=1, le=256, description="Upload chunk size")
    source_read_chunk_kb: int = Field(
        default=256, ge=16, le=16 * 1024, description="Source read chunk size"
    )
    channel_max_chunks: int = Field(
        default=64, ge=1, le=4096, description="Bounded hand-off channel depth"
    )
    source_timeout_seconds: float = Field(
        default=120.0, ge=1.0, le=3600.0, description="Max stall on either stream side"
    )
    upload_timeout_seconds: float = Field(
        default=3 * 3600.0, ge=60.0, le=24 * 3600.0, description="Max duration of a publication"
    )
    max_chunk_retries: int = Field(default=3, ge=0, le=10, description="Chunk resume attempts")
    watch_url_base: str = Field(
        default="https://www.youtube.com/watch?v=", description="Public watch URL prefix"
    )

    @property
    def upload_chunk_size(self) -> int:
        """Upload chunk size in bytes."""
        return self.upload_chunk_size_mb * MB

    @property
    def source_read_chunk_size(self) -> int:
        """Source read chunk size in bytes."""
        return self.source_read_chunk_kb * KB


__all__ = [
    "PublicationConfig",
]
