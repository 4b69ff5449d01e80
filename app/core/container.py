"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Supports ASP.NET Core-style lifecycles:
- Singleton: One instance for the entire application
- Scoped: One instance per request/task (FastAPI request or Celery task)
- Transient: New instance every time (Factory)

Usage:
    # In FastAPI
    from app.core.container import get_review_workflow

    @router.post("/reviews")
    async def create_review(workflow: ReviewWorkflow = Depends(get_review_workflow)):
        ...

    # In Celery
    from app.core.container import get_container

    pipeline = get_container().services.publication_pipeline()

    # In tests
    with container.services.publication_dispatcher.override(None):
        ...
"""

from dependency_injector import containers, providers

from app.core.config import Config, get_config
from app.services.publisher.dispatch import build_publication_dispatcher


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (databases, external clients).

    These are typically Singleton or have special lifecycle management.
    """

    global_config = providers.Dependency(instance_of=Config)
    configs = providers.DependenciesContainer()

    # ============================================
    # Database
    # ============================================

    # Shared with app.core.database so there is one pool per process
    db_engine = providers.Singleton(
        "app.core.database.get_engine",
    )

    db_session_factory = providers.Singleton(
        "app.core.database.get_session_maker",
    )

    # ============================================
    # HTTP Client
    # ============================================

    http_client = providers.Singleton(
        "app.infrastructure.http_client.HTTPClient",
    )

    # ============================================
    # Google APIs
    # ============================================

    google_auth_client = providers.Singleton(
        "app.infrastructure.google_auth.GoogleAuthClient",
        client_id=global_config.provided.youtube_client_id,
        client_secret=global_config.provided.youtube_client_secret,
        refresh_token=global_config.provided.youtube_refresh_token,
    )

    drive_api = providers.Singleton(
        "app.infrastructure.drive_api.DriveAPIClient",
        auth_client=google_auth_client,
        http_client=http_client,
    )

    youtube_api = providers.Singleton(
        "app.infrastructure.youtube_api.YouTubeAPIClient",
        auth_client=google_auth_client,
        max_retries=configs.publication_config.provided.max_chunk_retries,
        watch_url_base=configs.publication_config.provided.watch_url_base,
    )


class ConfigContainer(containers.DeclarativeContainer):
    """Configuration models container.

    Provides typed Pydantic config models for services.
    Configs are Singleton by default - loaded once and reused.
    """

    publication_config = providers.Singleton(
        "app.config.publication.PublicationConfig",
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services are typically Transient (Factory) or Scoped.
    They receive infrastructure dependencies via injection.
    """

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()
    configs = providers.DependenciesContainer()

    # ============================================
    # Storage
    # ============================================

    resource_repository = providers.Singleton(
        "app.repositories.resource_repository.ResourceRepository",
        db_session_factory=infrastructure.db_session_factory,
    )

    # ============================================
    # Review Services
    # ============================================

    status_history_recorder = providers.Factory(
        "app.services.review.history.StatusHistoryRecorder",
        repository=resource_repository,
    )

    # ============================================
    # Publication Services
    # ============================================

    publication_reconciler = providers.Factory(
        "app.services.publisher.reconciler.PublicationReconciler",
        repository=resource_repository,
        recorder=status_history_recorder,
    )

    publication_pipeline = providers.Factory(
        "app.services.publisher.pipeline.PublicationPipeline",
        drive_api=infrastructure.drive_api,
        youtube_api=infrastructure.youtube_api,
        repository=resource_repository,
        reconciler=publication_reconciler,
        config=configs.publication_config,
    )

    # None when publication is disabled or YouTube is not configured
    publication_dispatcher = providers.Singleton(
        build_publication_dispatcher,
        config=global_config,
        pipeline_factory=publication_pipeline.provider,
    )

    review_workflow = providers.Factory(
        "app.services.review.workflow.ReviewWorkflow",
        repository=resource_repository,
        recorder=status_history_recorder,
        dispatcher=publication_dispatcher,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Global Config singleton (environment variables)
    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Sub-containers
    configs = providers.Container(
        ConfigContainer,
    )

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
        configs=configs,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
        configs=configs,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


# ============================================
# FastAPI Integration
# ============================================


def get_container() -> ApplicationContainer:
    """Get the global container (for FastAPI Depends)."""
    return container


def get_review_workflow():
    """FastAPI dependency for the review workflow."""
    return container.services.review_workflow()


def get_resource_repository():
    """FastAPI dependency for the resource repository."""
    return container.services.resource_repository()


__all__ = [
    "ApplicationContainer",
    "ConfigContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
    "get_config",
    "get_container",
    "get_resource_repository",
    "get_review_workflow",
]
