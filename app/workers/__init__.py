"""Celery workers for SteamHub.

This package contains Celery tasks and configuration for background processing.

Modules:
- celery_app: Celery application configuration
- publish: Video publication tasks
"""

from app.workers.celery_app import celery_app

__all__ = [
    "celery_app",
]
