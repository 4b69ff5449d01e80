"""Unit tests for Celery application configuration."""

from unittest.mock import patch

from app.workers.celery_app import celery_app, init_worker_logging


class TestCeleryApp:
    """Tests for celery_app settings."""

    def test_publish_tasks_routed(self):
        """Test publication tasks go to the publish queue."""
        routes = celery_app.conf.task_routes
        assert routes["app.workers.publish.*"] == {"queue": "publish"}

    def test_json_only(self):
        """Test snapshots travel as JSON."""
        assert celery_app.conf.task_serializer == "json"
        assert celery_app.conf.accept_content == ["json"]

    def test_worker_process_configures_logging(self):
        """Test each worker process sets up structlog."""
        with patch("app.workers.celery_app.setup_logging") as mock_setup:
            init_worker_logging()

        mock_setup.assert_called_once_with()
