"""Google Drive API client.

Resolves shared Drive links to file IDs, reads file metadata and streams
file content without touching local disk.
"""

import asyncio
import re
from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
from googleapiclient.errors import HttpError

from app.core.exceptions import ExternalAPIError, SourceLinkError
from app.core.logging import get_logger
from app.infrastructure.google_auth import GoogleAuthClient
from app.infrastructure.http_client import HTTPClient

logger = get_logger(__name__)

DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"

# Supported link shapes: .../file/d/<id>/... and ...?id=<id>
_FILE_PATH_PATTERN = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
_ID_PARAM_PATTERN = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")


def extract_drive_file_id(link: str) -> str:
    """Extract the Drive file ID from a shared link.

    Args:
        link: Drive share link

    Returns:
        The file ID

    Raises:
        SourceLinkError: If the link matches no supported shape
    """
    for pattern in (_FILE_PATH_PATTERN, _ID_PARAM_PATTERN):
        match = pattern.search(link or "")
        if match:
            return match.group(1)
    raise SourceLinkError(source_link=link)


@dataclass
class DriveFile:
    """Drive file metadata.

    Attributes:
        file_id: Drive file ID
        name: File name
        mime_type: Content type reported by Drive (may be empty)
    """

    file_id: str
    name: str
    mime_type: str


class DriveAPIClient:
    """Read-only Google Drive client.

    Example:
        >>> drive = DriveAPIClient(auth_client, http_client)
        >>> info = await drive.get_file_metadata(file_id)
        >>> async for chunk in drive.iter_file(file_id):
        ...     handle(chunk)
    """

    def __init__(self, auth_client: GoogleAuthClient, http_client: HTTPClient) -> None:
        """Initialize Drive client.

        Args:
            auth_client: Google auth client
            http_client: Shared HTTP client used for content streaming
        """
        self.auth_client = auth_client
        self.http_client = http_client

    async def get_file_metadata(self, file_id: str) -> DriveFile:
        """Fetch the name and content type of a file.

        Args:
            file_id: Drive file ID

        Returns:
            DriveFile metadata

        Raises:
            ExternalAPIError: If Drive rejects the request
        """
        drive = await self.auth_client.get_drive_service()

        try:
            response = await asyncio.to_thread(
                drive.files()
                .get(fileId=file_id, fields="name,mimeType", supportsAllDrives=True)
                .execute
            )
        except HttpError as e:
            raise ExternalAPIError(
                service="google_drive",
                message=f"Failed to get file metadata: {e}",
                status_code=e.resp.status,
                endpoint=f"files/{file_id}",
            ) from e

        return DriveFile(
            file_id=file_id,
            name=response.get("name", ""),
            mime_type=response.get("mimeType", ""),
        )

    async def iter_file(self, file_id: str, chunk_size: int = 256 * 1024) -> AsyncIterator[bytes]:
        """Stream the content of a file.

        Args:
            file_id: Drive file ID
            chunk_size: Preferred size of yielded chunks

        Yields:
            Byte chunks in file order

        Raises:
            ExternalAPIError: If the download fails or is cut short
        """
        token = await self.auth_client.get_access_token()
        url = f"{DRIVE_FILES_URL}/{file_id}"

        try:
            async with self.http_client.stream(
                "GET",
                url,
                params={"alt": "media", "supportsAllDrives": "true"},
                headers={"Authorization": f"Bearer {token}"},
            ) as response:
                if response.status_code >= 400:
                    body = await response.aread()
                    raise ExternalAPIError(
                        service="google_drive",
                        message=f"File download failed with HTTP {response.status_code}",
                        status_code=response.status_code,
                        endpoint=url,
                        response_body=body.decode("utf-8", errors="replace")[:500],
                    )

                logger.debug("Drive download started", file_id=file_id)
                async for chunk in response.aiter_bytes(chunk_size):
                    yield chunk

        except httpx.HTTPError as e:
            raise ExternalAPIError(
                service="google_drive",
                message=f"File download interrupted: {e}",
                endpoint=url,
            ) from e


__all__ = [
    "DriveAPIClient",
    "DriveFile",
    "extract_drive_file_id",
]
