"""Unit tests for YouTube API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from app.core.exceptions import QuotaExceededError, SourceStreamError, YouTubeAPIError
from app.infrastructure.youtube_api import (
    UploadMetadata,
    YouTubeAPIClient,
)


def _sync_to_thread(f, *a, **kw):
    """Helper to mock asyncio.to_thread for synchronous execution."""
    return f(*a, **kw) if callable(f) else f


def _http_error(status: int, content: bytes = b"error") -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp, content)


class TestUploadMetadata:
    """Tests for UploadMetadata dataclass."""

    def test_metadata_defaults(self):
        """Test default values."""
        metadata = UploadMetadata(title="Fractions")

        assert metadata.description == ""
        assert metadata.tags == []
        assert metadata.category_id == "27"
        assert metadata.privacy_status == "unlisted"
        assert metadata.made_for_kids is False


class TestYouTubeAPIClient:
    """Tests for YouTubeAPIClient."""

    @pytest.fixture
    def mock_auth_client(self):
        """Create mock auth client."""
        auth = AsyncMock()
        auth.get_youtube_service = AsyncMock()
        return auth

    @pytest.fixture
    def client(self, mock_auth_client):
        """Create YouTube API client."""
        return YouTubeAPIClient(auth_client=mock_auth_client)

    @pytest.fixture
    def sample_metadata(self):
        """Create sample upload metadata."""
        return UploadMetadata(
            title="Fractions on a Number Line",
            description="Placing fractions between 0 and 1.",
            tags=["math", "fractions"],
            category_id="27",
            privacy_status="unlisted",
        )

    @pytest.fixture
    def media(self):
        """Create mock streaming media."""
        media = MagicMock()
        media.mimetype.return_value = "video/mp4"
        media.chunksize.return_value = 8 * 1024 * 1024
        return media

    def _mock_request(self, mock_auth_client, next_chunk):
        mock_service = MagicMock()
        mock_request = MagicMock()
        mock_request.next_chunk = next_chunk
        mock_service.videos.return_value.insert.return_value = mock_request
        mock_auth_client.get_youtube_service.return_value = mock_service
        return mock_service

    # =========================================================================
    # Initialization tests
    # =========================================================================

    def test_init_defaults(self, mock_auth_client):
        """Test initialization with default values."""
        client = YouTubeAPIClient(auth_client=mock_auth_client)

        assert client.max_retries == 3
        assert client.watch_url("abc") == "https://www.youtube.com/watch?v=abc"

    def test_init_custom_values(self, mock_auth_client):
        """Test initialization with custom values."""
        client = YouTubeAPIClient(
            auth_client=mock_auth_client,
            max_retries=5,
            watch_url_base="https://youtu.be/",
        )

        assert client.max_retries == 5
        assert client.watch_url("abc") == "https://youtu.be/abc"

    # =========================================================================
    # _build_video_body() tests
    # =========================================================================

    def test_build_video_body_basic(self, client, sample_metadata):
        """Test building basic video body."""
        body = client._build_video_body(sample_metadata)

        assert body["snippet"]["title"] == "Fractions on a Number Line"
        assert body["snippet"]["categoryId"] == "27"
        assert body["snippet"]["tags"] == ["math", "fractions"]
        assert body["status"]["privacyStatus"] == "unlisted"
        assert body["status"]["selfDeclaredMadeForKids"] is False

    def test_build_video_body_truncates_title(self, client):
        """Test that long titles are truncated."""
        body = client._build_video_body(UploadMetadata(title="x" * 150))

        assert len(body["snippet"]["title"]) == 100

    def test_build_video_body_without_tags(self, client):
        """Test that empty tags are omitted."""
        body = client._build_video_body(UploadMetadata(title="Fractions"))

        assert "tags" not in body["snippet"]

    # =========================================================================
    # upload_stream() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_upload_stream_success(self, client, mock_auth_client, sample_metadata, media):
        """Test successful streaming upload."""
        progress = MagicMock(resumable_progress=8 * 1024 * 1024)
        responses = iter(
            [
                (progress, None),
                (None, {"id": "yt_123", "status": {"uploadStatus": "uploaded"}}),
            ]
        )
        mock_service = self._mock_request(mock_auth_client, lambda: next(responses))

        with patch("asyncio.to_thread", side_effect=_sync_to_thread):
            result = await client.upload_stream(media, sample_metadata, resource_id="res-1")

        assert result.video_id == "yt_123"
        assert result.url == "https://www.youtube.com/watch?v=yt_123"
        assert result.status == "uploaded"
        insert_kwargs = mock_service.videos.return_value.insert.call_args[1]
        assert insert_kwargs["media_body"] is media
        assert insert_kwargs["part"] == "snippet,status"

    @pytest.mark.asyncio
    async def test_upload_stream_quota_exceeded(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test upload raises QuotaExceededError."""
        self._mock_request(
            mock_auth_client, MagicMock(side_effect=_http_error(403, b"quotaExceeded"))
        )

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(QuotaExceededError),
        ):
            await client.upload_stream(media, sample_metadata)

    @pytest.mark.asyncio
    async def test_upload_stream_retries_on_503(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test that a chunk is resent after a 503."""
        call_count = [0]

        def next_chunk_side_effect():
            call_count[0] += 1
            if call_count[0] == 1:
                raise _http_error(503, b"Service Unavailable")
            return (None, {"id": "yt_retry_success", "status": {}})

        self._mock_request(mock_auth_client, next_chunk_side_effect)

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            patch("asyncio.sleep", new_callable=AsyncMock),
        ):
            result = await client.upload_stream(media, sample_metadata)

        assert result.video_id == "yt_retry_success"
        assert call_count[0] == 2

    @pytest.mark.asyncio
    async def test_upload_stream_max_retries_exceeded(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test that upload fails after max retries."""
        next_chunk = MagicMock(side_effect=_http_error(503, b"Service Unavailable"))
        self._mock_request(mock_auth_client, next_chunk)

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            patch("asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(YouTubeAPIError),
        ):
            await client.upload_stream(media, sample_metadata)

        assert next_chunk.call_count == client.max_retries + 1

    @pytest.mark.asyncio
    async def test_upload_stream_client_error_not_retried(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test that a 400 fails at once."""
        next_chunk = MagicMock(side_effect=_http_error(400, b"invalid"))
        self._mock_request(mock_auth_client, next_chunk)

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(YouTubeAPIError) as exc_info,
        ):
            await client.upload_stream(media, sample_metadata)

        assert exc_info.value.error_code == "400"
        assert next_chunk.call_count == 1

    @pytest.mark.asyncio
    async def test_upload_stream_source_failure_not_retried(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test that a broken media source ends the upload."""
        next_chunk = MagicMock(side_effect=SourceStreamError("Source stream failed: reset"))
        self._mock_request(mock_auth_client, next_chunk)

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(SourceStreamError),
        ):
            await client.upload_stream(media, sample_metadata)

        assert next_chunk.call_count == 1

    @pytest.mark.asyncio
    async def test_upload_stream_retries_transport_error(
        self, client, mock_auth_client, sample_metadata, media
    ):
        """Test that connection errors are retried."""
        next_chunk = MagicMock(
            side_effect=[ConnectionResetError("reset"), (None, {"id": "yt_456", "status": {}})]
        )
        self._mock_request(mock_auth_client, next_chunk)

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            patch("asyncio.sleep", new_callable=AsyncMock),
        ):
            result = await client.upload_stream(media, sample_metadata)

        assert result.video_id == "yt_456"

