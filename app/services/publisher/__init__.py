"""Publication services.

Streams approved Video resources from Google Drive to YouTube and applies
the result to the resource row.
"""

from app.services.publisher.dispatch import (
    CeleryPublicationDispatcher,
    InProcessPublicationDispatcher,
    PublicationDispatcher,
    build_publication_dispatcher,
)
from app.services.publisher.metadata import (
    PublicationOverrides,
    ResourceSnapshot,
    build_default_description,
    resolve_metadata,
)
from app.services.publisher.pipeline import PublicationPipeline, PublicationResult
from app.services.publisher.reconciler import PublicationReconciler
from app.services.publisher.streaming import ByteChannel, ChannelMediaUpload, pump_source

__all__ = [
    "ByteChannel",
    "CeleryPublicationDispatcher",
    "ChannelMediaUpload",
    "InProcessPublicationDispatcher",
    "PublicationDispatcher",
    "PublicationOverrides",
    "PublicationPipeline",
    "PublicationReconciler",
    "PublicationResult",
    "ResourceSnapshot",
    "build_default_description",
    "build_publication_dispatcher",
    "pump_source",
    "resolve_metadata",
]
