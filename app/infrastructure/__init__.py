"""Infrastructure layer: clients for external services."""

from app.infrastructure.drive_api import DriveAPIClient, DriveFile, extract_drive_file_id
from app.infrastructure.google_auth import GoogleAuthClient
from app.infrastructure.http_client import HTTPClient
from app.infrastructure.youtube_api import UploadMetadata, UploadResult, YouTubeAPIClient

__all__ = [
    "DriveAPIClient",
    "DriveFile",
    "GoogleAuthClient",
    "HTTPClient",
    "UploadMetadata",
    "UploadResult",
    "YouTubeAPIClient",
    "extract_drive_file_id",
]
