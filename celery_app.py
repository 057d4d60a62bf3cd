"""
Celery Application Instance

Creates the Celery app instance for use by workers and the beat scheduler.
Uses the app factory so the worker shares the web process's wiring; the
in-process sweeper thread is disabled because beat schedules the sweep.
"""

from app_factory import AppConfig, create_app

flask_app = create_app(AppConfig(sweeper_backend="celery"))

celery_app = flask_app.celery

# Task modules are imported by name when the worker starts, which avoids
# the circular import tasks -> cleanup_task -> celery_app.
celery_app.conf.imports = (
    "qrdrop.tasks.cleanup_task",
)
