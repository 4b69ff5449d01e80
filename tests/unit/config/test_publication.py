"""Unit tests for publication pipeline configuration."""

import pytest
from pydantic import ValidationError

from app.config.publication import KB, MB, PublicationConfig


class TestPublicationConfig:
    """Tests for PublicationConfig model."""

    def test_default_config(self):
        """Test default destination settings."""
        config = PublicationConfig()
        assert config.default_category_id == "27"
        assert config.default_privacy == "unlisted"
        assert config.default_mime_type == "video/mp4"
        assert config.watch_url_base == "https://www.youtube.com/watch?v="

    def test_byte_sizes(self):
        """Test chunk sizes are derived in bytes."""
        config = PublicationConfig(upload_chunk_size_mb=4, source_read_chunk_kb=64)
        assert config.upload_chunk_size == 4 * MB
        assert config.source_read_chunk_size == 64 * KB

    def test_invalid_privacy_fails(self):
        """Test that unknown privacy status fails validation."""
        with pytest.raises(ValidationError):
            PublicationConfig(default_privacy="friends-only")

    def test_zero_channel_depth_fails(self):
        """Test that the hand-off channel must hold at least one chunk."""
        with pytest.raises(ValidationError):
            PublicationConfig(channel_max_chunks=0)

    def test_chunk_retries_can_be_disabled(self):
        """Test that zero chunk retries is allowed."""
        config = PublicationConfig(max_chunk_retries=0)
        assert config.max_chunk_retries == 0
