"""Unit tests for Google Drive API client."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from googleapiclient.errors import HttpError

from app.core.exceptions import ExternalAPIError, SourceLinkError
from app.infrastructure.drive_api import DRIVE_FILES_URL, DriveAPIClient, extract_drive_file_id


def _sync_to_thread(f, *a, **kw):
    """Helper to mock asyncio.to_thread for synchronous execution."""
    return f(*a, **kw) if callable(f) else f


class FakeStreamResponse:
    """Minimal streaming response."""

    def __init__(self, status_code=200, chunks=(), body=b"", error=None):
        self.status_code = status_code
        self.chunks = list(chunks)
        self.body = body
        self.error = error

    async def aread(self):
        return self.body

    async def aiter_bytes(self, chunk_size=None):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


def _stream_returning(response, calls):
    @asynccontextmanager
    async def stream(method, url, **kwargs):
        calls.append((method, url, kwargs))
        yield response

    return stream


class TestExtractDriveFileId:
    """Tests for extract_drive_file_id()."""

    @pytest.mark.parametrize(
        "link,expected",
        [
            ("https://drive.google.com/file/d/1AbC_dEf-123/view?usp=sharing", "1AbC_dEf-123"),
            ("https://drive.google.com/file/d/XYZ/preview", "XYZ"),
            ("https://drive.google.com/open?id=1AbC_dEf-123", "1AbC_dEf-123"),
            ("https://drive.google.com/uc?export=download&id=abc-DEF_9", "abc-DEF_9"),
        ],
    )
    def test_supported_shapes(self, link, expected):
        assert extract_drive_file_id(link) == expected

    @pytest.mark.parametrize(
        "link",
        [
            "",
            "https://example.com/video.mp4",
            "https://drive.google.com/drive/folders/abc",
        ],
    )
    def test_unsupported_shapes(self, link):
        with pytest.raises(SourceLinkError) as exc_info:
            extract_drive_file_id(link)

        assert exc_info.value.source_link == link


class TestDriveAPIClient:
    """Tests for DriveAPIClient."""

    @pytest.fixture
    def mock_auth_client(self):
        auth = AsyncMock()
        auth.get_drive_service = AsyncMock()
        auth.get_access_token = AsyncMock(return_value="ya29.token")
        return auth

    @pytest.fixture
    def mock_http_client(self):
        return MagicMock()

    @pytest.fixture
    def client(self, mock_auth_client, mock_http_client):
        return DriveAPIClient(mock_auth_client, mock_http_client)

    # =========================================================================
    # get_file_metadata() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_get_file_metadata(self, client, mock_auth_client):
        mock_service = MagicMock()
        mock_service.files.return_value.get.return_value.execute.return_value = {
            "name": "lesson.mp4",
            "mimeType": "video/mp4",
        }
        mock_auth_client.get_drive_service.return_value = mock_service

        with patch("asyncio.to_thread", side_effect=_sync_to_thread):
            info = await client.get_file_metadata("abc")

        assert info.file_id == "abc"
        assert info.name == "lesson.mp4"
        assert info.mime_type == "video/mp4"
        mock_service.files.return_value.get.assert_called_once_with(
            fileId="abc", fields="name,mimeType", supportsAllDrives=True
        )

    @pytest.mark.asyncio
    async def test_get_file_metadata_missing_mime(self, client, mock_auth_client):
        mock_service = MagicMock()
        mock_service.files.return_value.get.return_value.execute.return_value = {"name": "clip"}
        mock_auth_client.get_drive_service.return_value = mock_service

        with patch("asyncio.to_thread", side_effect=_sync_to_thread):
            info = await client.get_file_metadata("abc")

        assert info.mime_type == ""

    @pytest.mark.asyncio
    async def test_get_file_metadata_not_found(self, client, mock_auth_client):
        resp = MagicMock()
        resp.status = 404
        mock_service = MagicMock()
        mock_service.files.return_value.get.return_value.execute.side_effect = HttpError(
            resp, b"File not found"
        )
        mock_auth_client.get_drive_service.return_value = mock_service

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(ExternalAPIError) as exc_info,
        ):
            await client.get_file_metadata("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.service == "google_drive"

    # =========================================================================
    # iter_file() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_iter_file_streams_chunks(self, client, mock_http_client):
        calls = []
        response = FakeStreamResponse(chunks=[b"abc", b"def"])
        mock_http_client.stream = _stream_returning(response, calls)

        chunks = [chunk async for chunk in client.iter_file("abc", chunk_size=3)]

        assert chunks == [b"abc", b"def"]
        method, url, kwargs = calls[0]
        assert method == "GET"
        assert url == f"{DRIVE_FILES_URL}/abc"
        assert kwargs["params"]["alt"] == "media"
        assert kwargs["headers"]["Authorization"] == "Bearer ya29.token"

    @pytest.mark.asyncio
    async def test_iter_file_http_error(self, client, mock_http_client):
        response = FakeStreamResponse(status_code=403, body=b"cannotDownloadFile")
        mock_http_client.stream = _stream_returning(response, [])

        with pytest.raises(ExternalAPIError) as exc_info:
            async for _ in client.iter_file("abc"):
                pass

        assert exc_info.value.status_code == 403
        assert "cannotDownloadFile" in exc_info.value.context["response_body"]

    @pytest.mark.asyncio
    async def test_iter_file_interrupted(self, client, mock_http_client):
        """A connection drop mid-download surfaces as ExternalAPIError."""
        response = FakeStreamResponse(
            chunks=[b"abc"], error=httpx.RemoteProtocolError("peer closed connection")
        )
        mock_http_client.stream = _stream_returning(response, [])

        received = []
        with pytest.raises(ExternalAPIError, match="interrupted"):
            async for chunk in client.iter_file("abc"):
                received.append(chunk)

        assert received == [b"abc"]
