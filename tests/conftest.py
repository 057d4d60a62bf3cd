"""
Shared pytest fixtures and configuration for the qrdrop test suite.

This module provides:
- Hypothesis configuration for property-based testing
- An isolated data directory for modules that build the app at import time
- Application, client and clock fixtures
"""

import os
import tempfile

# celery_app builds a Flask app at import time; keep its files out of the repo
os.environ.setdefault("QRDROP_DATA_DIR", tempfile.mkdtemp(prefix="qrdrop-test-"))

import pytest
from hypothesis import settings, HealthCheck

from app_factory import AppConfig, create_app
from tests.fixtures.mock_repositories import DummyStorageRepo, FakeClock, InMemoryRecordRepo

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable epoch-ms clock."""
    return FakeClock()


@pytest.fixture
def record_repo() -> InMemoryRecordRepo:
    return InMemoryRecordRepo()


@pytest.fixture
def storage_repo() -> DummyStorageRepo:
    return DummyStorageRepo()


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def app_config(tmp_path, clock) -> AppConfig:
    """Configuration isolated in a temporary data dir, sweeper disabled."""
    return AppConfig(
        data_dir=str(tmp_path / "data"),
        sweeper_backend="none",
        clock=clock,
    )


@pytest.fixture
def app(app_config):
    app = create_app(app_config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
