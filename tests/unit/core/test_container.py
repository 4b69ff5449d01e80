"""Unit tests for Dependency Injection Container.

Tests cover:
- Container initialization and configuration
- Publication dispatcher selection
- Service wiring
- Testing utilities (overrides)
"""

from unittest.mock import MagicMock

import pytest
from dependency_injector import providers

from app.core.config import Config
from app.core.container import container, create_container, get_container
from app.repositories.resource_repository import ResourceRepository
from app.services.publisher.dispatch import (
    CeleryPublicationDispatcher,
    InProcessPublicationDispatcher,
)
from app.services.publisher.pipeline import PublicationPipeline
from app.services.review.workflow import ReviewWorkflow


def _config(**overrides) -> Config:
    return Config(_env_file=None, **overrides)


def _youtube_config(**overrides) -> Config:
    return _config(
        youtube_client_id="client-id",
        youtube_client_secret="client-secret",
        youtube_refresh_token="refresh-token",
        **overrides,
    )


@pytest.fixture
def test_container():
    """Create a container with infrastructure replaced by mocks."""
    new_container = create_container()
    new_container.infrastructure.db_session_factory.override(providers.Object(MagicMock()))
    new_container.infrastructure.drive_api.override(providers.Object(MagicMock()))
    new_container.infrastructure.youtube_api.override(providers.Object(MagicMock()))
    return new_container


class TestContainerCreation:
    """Tests for container creation and configuration."""

    def test_create_container_returns_container_with_providers(self) -> None:
        """Test that create_container returns a container with expected providers."""
        new_container = create_container()
        assert hasattr(new_container, "config")
        assert hasattr(new_container, "infrastructure")
        assert hasattr(new_container, "services")
        assert hasattr(new_container, "configs")

    def test_get_container_returns_global(self) -> None:
        """Test FastAPI helper returns the global container."""
        assert get_container() is container

    def test_publication_config_singleton(self) -> None:
        """Test publication config is loaded once."""
        new_container = create_container()
        assert new_container.configs.publication_config() is (
            new_container.configs.publication_config()
        )


class TestPublicationDispatcher:
    """Tests for publication dispatcher selection."""

    def test_no_credentials(self, test_container) -> None:
        """Test dispatcher is None without YouTube credentials."""
        test_container.config.override(providers.Object(_config()))

        assert test_container.services.publication_dispatcher() is None

    def test_celery_backend(self, test_container) -> None:
        """Test default backend queues on Celery."""
        test_container.config.override(providers.Object(_youtube_config()))

        dispatcher = test_container.services.publication_dispatcher()

        assert isinstance(dispatcher, CeleryPublicationDispatcher)

    def test_inprocess_backend_builds_pipelines(self, test_container) -> None:
        """Test in-process dispatcher gets a working pipeline factory."""
        test_container.config.override(
            providers.Object(_youtube_config(publication_backend="inprocess"))
        )

        dispatcher = test_container.services.publication_dispatcher()

        assert isinstance(dispatcher, InProcessPublicationDispatcher)
        pipeline = dispatcher.pipeline_factory()
        assert isinstance(pipeline, PublicationPipeline)
        assert pipeline is not dispatcher.pipeline_factory()

    def test_dispatcher_is_singleton(self, test_container) -> None:
        """Test dispatcher is resolved once per process."""
        test_container.config.override(providers.Object(_youtube_config()))

        assert (
            test_container.services.publication_dispatcher()
            is test_container.services.publication_dispatcher()
        )


class TestServiceWiring:
    """Tests for service providers."""

    def test_review_workflow(self, test_container) -> None:
        """Test workflow is built with repository and dispatcher."""
        test_container.config.override(providers.Object(_config()))

        workflow = test_container.services.review_workflow()

        assert isinstance(workflow, ReviewWorkflow)
        assert isinstance(workflow.repository, ResourceRepository)
        assert workflow.dispatcher is None

    def test_repository_shared(self, test_container) -> None:
        """Test all services share one repository."""
        test_container.config.override(providers.Object(_config()))

        workflow = test_container.services.review_workflow()
        pipeline = test_container.services.publication_pipeline()

        assert workflow.repository is pipeline.repository
        assert pipeline.reconciler.repository is pipeline.repository

    def test_override_dispatcher(self, test_container) -> None:
        """Test dispatcher can be overridden in tests."""
        fake = MagicMock()
        test_container.config.override(providers.Object(_config()))

        with test_container.services.publication_dispatcher.override(fake):
            workflow = test_container.services.review_workflow()

        assert workflow.dispatcher is fake
