"""
Application Factory

Creates and configures the Flask application with all dependencies.
The factory pattern allows tests to inject configuration overrides such as
a temporary data directory or a short TTL.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from qrdrop.application.dependency_container import DependencyContainer
from qrdrop.application.event_publisher import EventPublisher
from qrdrop.application.share_service import ShareService
from qrdrop.config.celery_config import make_celery
from qrdrop.domain.events import DomainEvent
from qrdrop.domain.file_storage import ShareManager, current_millis
from qrdrop.infrastructure.event_handlers import LoggingEventHandler
from qrdrop.infrastructure.expiry_sweeper import ExpirySweeper
from qrdrop.infrastructure.json_record_repository import JsonFileRecordRepository
from qrdrop.infrastructure.local_file_storage_repository import LocalFileStorageRepository
from qrdrop.infrastructure.qr_code_renderer import QrCodeRenderer

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

# Compiled-in limits
FILE_TTL_MS = 10 * 60 * 1000
MAX_UPLOAD_BYTES = 200 * 1024 * 1024
SWEEP_INTERVAL_SECONDS = 60.0

SWEEPER_BACKENDS = ("thread", "celery", "none")


class AppConfig:
    """Application configuration."""

    def __init__(self, data_dir: Optional[str] = None,
                 sweeper_backend: Optional[str] = None,
                 ttl_ms: int = FILE_TTL_MS,
                 max_upload_bytes: int = MAX_UPLOAD_BYTES,
                 sweep_interval_seconds: float = SWEEP_INTERVAL_SECONDS,
                 clock: Callable[[], int] = current_millis):
        self.data_dir = Path(data_dir or os.getenv("QRDROP_DATA_DIR", "data"))
        self.sweeper_backend = (
            sweeper_backend or os.getenv("SWEEPER_BACKEND", "thread")
        ).lower()
        if self.sweeper_backend not in SWEEPER_BACKENDS:
            raise ValueError(
                f"SWEEPER_BACKEND must be one of {SWEEPER_BACKENDS}, got {self.sweeper_backend!r}"
            )

        self.ttl_ms = ttl_ms
        self.max_upload_bytes = max_upload_bytes
        self.sweep_interval_seconds = sweep_interval_seconds
        self.clock = clock

    @property
    def store_path(self) -> Path:
        return self.data_dir / "files.json"

    @property
    def upload_dir(self) -> Path:
        return self.data_dir / "uploads"


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__, static_folder=str(PUBLIC_DIR), static_url_path="")
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes

    CORS(app)

    app.celery = make_celery(app)

    _initialize_services(app, config)

    # Registered before the API blueprint, whose root route answers 404
    _register_index(app)
    _register_blueprints(app)
    _register_health_endpoint(app)

    _start_sweeper(app, config)

    return app


def _initialize_services(app: Flask, config: AppConfig) -> None:
    """
    Build the service graph and attach it to the app via DependencyContainer.

    Args:
        app: Flask application
        config: Application configuration
    """
    container = DependencyContainer()

    record_repository = JsonFileRecordRepository(str(config.store_path))
    storage_repository = LocalFileStorageRepository(str(config.upload_dir))
    qr_renderer = QrCodeRenderer()

    event_publisher = EventPublisher()
    logging_handler = LoggingEventHandler(logging.getLogger("qrdrop"))
    event_publisher.subscribe(DomainEvent, logging_handler.handle)

    share_manager = ShareManager(
        record_repository,
        storage_repository,
        ttl_ms=config.ttl_ms,
        clock=config.clock,
    )
    share_service = ShareService(
        share_manager, storage_repository, qr_renderer, event_publisher
    )

    container.register_singleton(JsonFileRecordRepository, record_repository)
    container.register_singleton(LocalFileStorageRepository, storage_repository)
    container.register_singleton(QrCodeRenderer, qr_renderer)
    container.register_singleton(EventPublisher, event_publisher)
    container.register_singleton(ShareManager, share_manager)
    container.register_singleton(ShareService, share_service)

    app.container = container
    logger.debug(f"Services initialized with data dir {config.data_dir}")


def _register_index(app: Flask) -> None:
    @app.route("/", methods=["GET"])
    def index():
        return app.send_static_file("index.html")


def _register_blueprints(app: Flask) -> None:
    from qrdrop.api import share_bp

    app.register_blueprint(share_bp)


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """Liveness plus the number of records currently in the store."""
        share_service = app.container.resolve(ShareService)
        return jsonify({"ok": True, "stored": share_service.count_shares()})


def _start_sweeper(app: Flask, config: AppConfig) -> None:
    """
    Start the in-process expiry sweeper when configured.

    With the "celery" backend Celery beat schedules the sweep instead.
    """
    app.sweeper = None
    if config.sweeper_backend != "thread":
        logger.info(f"In-process sweeper disabled (backend={config.sweeper_backend})")
        return

    sweeper = ExpirySweeper(
        app.container.resolve(ShareService),
        interval_seconds=config.sweep_interval_seconds,
    )
    sweeper.start()
    app.sweeper = sweeper
