"""Celery application configuration.

This module configures the Celery application for SteamHub background tasks.
Uses Redis as both broker and result backend.
"""

from celery import Celery
from celery.signals import worker_process_init

from app.core.config import get_config
from app.core.logging import setup_logging

config = get_config()

# Create Celery app
celery_app = Celery(
    "steamhub",
    broker=str(config.celery_broker_url),
    backend=str(config.celery_result_backend),
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_reject_on_worker_lost=False,
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    # Result settings
    result_expires=86400,  # 24 hours
    result_extended=True,
    # Task routes
    task_routes={
        "app.workers.publish.*": {"queue": "publish"},
    },
    # Default queue
    task_default_queue="default",
)

# Auto-discover tasks from these modules
celery_app.autodiscover_tasks(
    [
        "app.workers.publish",
    ],
    related_name=None,
)


@worker_process_init.connect(weak=False)
def init_worker_logging(*args, **kwargs) -> None:
    """Configure structlog in each forked worker process."""
    setup_logging()


__all__ = ["celery_app", "init_worker_logging"]
