"""
Unit tests for the Celery expiry sweep task.

Verifies the task resolves ShareService from the worker app's container,
reports sweep counts and turns failures into an error entry.
"""

from unittest.mock import MagicMock, Mock, patch

import pytest

from qrdrop.application.share_service import ShareService
from qrdrop.domain.file_storage import CleanupReport


@pytest.fixture
def mock_share_service():
    service = Mock()
    service.sweep_expired.return_value = CleanupReport(
        started_at=0,
        removed_ids=["aaaaaaaaaaaa", "bbbbbbbbbbbb"],
        failures=[("bbbbbbbbbbbb", "/srv/uploads/b")],
    )
    return service


@pytest.fixture
def mock_container(mock_share_service):
    container = MagicMock()

    def resolve(service_type):
        if service_type is ShareService:
            return mock_share_service
        raise ValueError(f"Unknown service type: {service_type}")

    container.resolve.side_effect = resolve
    return container


class TestCleanupTask:
    @patch("celery_app.flask_app")
    def test_reports_sweep_counts(self, mock_flask_app, mock_container, mock_share_service):
        mock_flask_app.container = mock_container
        from qrdrop.tasks.cleanup_task import cleanup_expired_files

        result = cleanup_expired_files()

        mock_share_service.sweep_expired.assert_called_once_with()
        assert result == {
            "expired_files_cleaned": 2,
            "deletion_failures": 1,
            "errors": [],
        }

    @patch("celery_app.flask_app")
    def test_failure_is_reported_not_raised(self, mock_flask_app, mock_container, mock_share_service):
        mock_flask_app.container = mock_container
        mock_share_service.sweep_expired.side_effect = RuntimeError("store unreadable")
        from qrdrop.tasks.cleanup_task import cleanup_expired_files

        result = cleanup_expired_files()

        assert result["expired_files_cleaned"] == 0
        assert result["errors"] == ["Expiry sweep task failed: store unreadable"]

    def test_task_is_scheduled_every_minute(self):
        from celery_app import celery_app
        from qrdrop.config.celery_config import SWEEP_TASK_NAME

        schedule = celery_app.conf.beat_schedule["sweep-expired-files"]

        assert schedule["task"] == SWEEP_TASK_NAME
        assert schedule["schedule"] == 60.0

    def test_worker_app_does_not_start_thread_sweeper(self):
        from celery_app import flask_app

        assert flask_app.sweeper is None
