"""
Cleanup Task

Celery beat task for periodic removal of expired shares.
Thin wrapper that delegates to ShareService.
"""

import logging

from celery_app import celery_app
from qrdrop.config.celery_config import SWEEP_TASK_NAME

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name=SWEEP_TASK_NAME)
def cleanup_expired_files(self):
    """
    Periodic sweep removing expired records and their stored bytes.

    Resolves ShareService from the DependencyContainer of the worker's
    Flask app; never touches infrastructure directly.

    Returns:
        dict: Counts of removed files and deletion failures, plus errors
    """
    logger.info("Starting expiry sweep task")

    try:
        from celery_app import flask_app
        from qrdrop.application.share_service import ShareService

        share_service = flask_app.container.resolve(ShareService)
        report = share_service.sweep_expired()

    except Exception as e:
        error_msg = f"Expiry sweep task failed: {e}"
        logger.error(error_msg, exc_info=True)
        return {
            "expired_files_cleaned": 0,
            "deletion_failures": 0,
            "errors": [error_msg],
        }

    stats = report.to_dict()
    stats["errors"] = []

    logger.info(
        f"Expiry sweep completed - Files: {stats['expired_files_cleaned']}, "
        f"Deletion failures: {stats['deletion_failures']}"
    )
    return stats
