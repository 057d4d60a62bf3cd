"""
Expiry Sweeper

In-process periodic task removing expired shares for the lifetime of the
web process. Deployments running Celery beat use
qrdrop.tasks.cleanup_task instead.
"""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Daemon thread calling ShareService.sweep_expired at a fixed interval.

    A failing sweep is logged and the next one runs on schedule.
    """

    def __init__(self, share_service, interval_seconds: float = 60.0):
        """
        Initialize the sweeper.

        Args:
            share_service: ShareService performing the sweep
            interval_seconds: Delay between sweeps
        """
        self.share_service = share_service
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="qrdrop-expiry-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(f"Expiry sweeper started (every {self.interval_seconds:g}s)")

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run_once(self):
        """
        Run a single sweep.

        Returns:
            CleanupReport, or None if the sweep failed
        """
        try:
            report = self.share_service.sweep_expired()
        except Exception as e:
            logger.error(f"Expiry sweep failed: {e}", exc_info=True)
            return None

        if report.removed_count:
            logger.info(
                f"Expiry sweep removed {report.removed_count} file(s), "
                f"{len(report.failures)} deletion failure(s)"
            )
        return report

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()
