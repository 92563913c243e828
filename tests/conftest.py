"""
Pytest configuration and shared fixtures.

Adjusts sys.path so `import diagnostic_server` works when tests run from the
repository root without an installed package.
"""
import logging
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Compute the project root that contains the 'diagnostic_server' directory
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Prepend project root to sys.path if not already present
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from diagnostic_server.api.main import create_app  # noqa: E402
from diagnostic_server.core.config import Settings  # noqa: E402
from diagnostic_server.models.state import HealthState, ServerIdentity  # noqa: E402

TEST_SERVER_ID = "0A1B2C3D"
TEST_STARTED_AT = "2024-05-01T12:00:00.000Z"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(base_path="/diag/")


@pytest.fixture
def identity() -> ServerIdentity:
    return ServerIdentity(server_id=TEST_SERVER_ID, started_at=TEST_STARTED_AT)


@pytest.fixture
def health_state() -> HealthState:
    return HealthState()


_NO_PARAMS = object()


@pytest.fixture
def make_app(settings, identity, health_state):
    """Build an app with the shared fixtures, overriding the startup params."""
    def _make(params=_NO_PARAMS):
        return create_app(settings, identity, {} if params is _NO_PARAMS else params, health_state)
    return _make


@pytest.fixture
def client(make_app):
    return TestClient(make_app({"feature": "on"}))


@pytest.fixture
def restore_root_logging():
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
