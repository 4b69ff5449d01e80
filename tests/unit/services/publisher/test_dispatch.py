"""Unit tests for publication dispatchers."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.config import Config
from app.models.resource import ResourceCategory
from app.services.publisher.dispatch import (
    PUBLISH_QUEUE,
    PUBLISH_TASK_NAME,
    CeleryPublicationDispatcher,
    InProcessPublicationDispatcher,
    build_publication_dispatcher,
)
from app.services.publisher.metadata import ResourceSnapshot


@pytest.fixture
def snapshot():
    return ResourceSnapshot(
        resource_id=uuid.uuid4(),
        title="Fractions",
        category=ResourceCategory.VIDEO,
        drive_link="https://drive.google.com/file/d/1AbC/view",
    )


def _config(**overrides):
    values = {
        "youtube_client_id": "client-id",
        "youtube_client_secret": "client-secret",
        "youtube_refresh_token": "refresh-token",
    }
    values.update(overrides)
    return Config(_env_file=None, **values)


class TestBuildPublicationDispatcher:
    """Tests for build_publication_dispatcher()."""

    def test_celery_default(self):
        dispatcher = build_publication_dispatcher(_config(), MagicMock())
        assert isinstance(dispatcher, CeleryPublicationDispatcher)
        assert dispatcher.queue == PUBLISH_QUEUE

    def test_inprocess_backend(self):
        factory = MagicMock()
        dispatcher = build_publication_dispatcher(
            _config(publication_backend="inprocess"), factory
        )
        assert isinstance(dispatcher, InProcessPublicationDispatcher)
        assert dispatcher.pipeline_factory is factory

    def test_missing_credentials(self):
        """Publication is unavailable without a refresh token."""
        config = _config(youtube_refresh_token="")
        assert build_publication_dispatcher(config, MagicMock()) is None

    def test_auto_publish_disabled(self):
        config = _config(enable_auto_publish=False)
        assert build_publication_dispatcher(config, MagicMock()) is None


class TestCeleryPublicationDispatcher:
    """Tests for CeleryPublicationDispatcher."""

    def test_sends_snapshot_payload(self, snapshot):
        with patch("app.workers.celery_app.celery_app") as mock_app:
            mock_app.send_task.return_value = MagicMock(id="task-1")

            CeleryPublicationDispatcher().dispatch(snapshot)

        mock_app.send_task.assert_called_once_with(
            PUBLISH_TASK_NAME,
            args=[snapshot.to_dict()],
            queue=PUBLISH_QUEUE,
        )


class TestInProcessPublicationDispatcher:
    """Tests for InProcessPublicationDispatcher."""

    @pytest.mark.asyncio
    async def test_runs_in_background(self, snapshot):
        """dispatch() returns before the publication has run."""
        pipeline = MagicMock()
        pipeline.publish = AsyncMock(return_value=None)
        dispatcher = InProcessPublicationDispatcher(lambda: pipeline)

        dispatcher.dispatch(snapshot)

        assert dispatcher.pending == 1
        pipeline.publish.assert_not_called()

        await dispatcher.wait_idle()

        assert dispatcher.pending == 0
        pipeline.publish.assert_awaited_once_with(snapshot)

    @pytest.mark.asyncio
    async def test_crash_is_contained(self, snapshot):
        """An exception inside the run is logged, not raised."""
        pipeline = MagicMock()
        pipeline.publish = AsyncMock(side_effect=RuntimeError("boom"))
        dispatcher = InProcessPublicationDispatcher(lambda: pipeline)

        dispatcher.dispatch(snapshot)
        await dispatcher.wait_idle()

        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_factory_failure_is_contained(self, snapshot):
        def broken_factory():
            raise RuntimeError("no credentials")

        dispatcher = InProcessPublicationDispatcher(broken_factory)

        dispatcher.dispatch(snapshot)
        await dispatcher.wait_idle()

        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_fresh_pipeline_per_publication(self, snapshot):
        pipelines = []

        def factory():
            pipeline = MagicMock()
            pipeline.publish = AsyncMock()
            pipelines.append(pipeline)
            return pipeline

        dispatcher = InProcessPublicationDispatcher(factory)
        dispatcher.dispatch(snapshot)
        dispatcher.dispatch(snapshot)
        await dispatcher.wait_idle()

        assert len(pipelines) == 2
