"""Pytest fixtures for all tests."""

import base64
import io

import pytest
from httpx import AsyncClient, ASGITransport

from config import ApiConfig, Config, LoggingConfig
from core.minter import Minter
from internal.logging import AsyncFileLogger, LogLevel, StructuredLogger
from ui.app import create_app


@pytest.fixture
def log_stream():
    """Capture structured log output."""
    stream = io.StringIO()
    StructuredLogger.configure(LogLevel.DEBUG, stream=stream)
    yield stream
    StructuredLogger.configure()


@pytest.fixture
def ledger(tmp_path):
    """Create test mint ledger."""
    return AsyncFileLogger(file_path=str(tmp_path / "ledger.log"), queue_size=10)


@pytest.fixture
def minter(ledger):
    """Create test minter."""
    return Minter(max_batch=50, ledger=ledger)


@pytest.fixture
def app_config(tmp_path):
    """Create test service config."""
    return Config(
        logging=LoggingConfig(file=str(tmp_path / "tuid.log"), crash_file=str(tmp_path / "crash.log")),
        api=ApiConfig(username="admin", password="secret", max_batch=20),
    )


@pytest.fixture
async def client(app_config):
    """Create async test client."""
    app = create_app(app_config)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_header():
    """Basic auth header matching app_config."""
    credentials = base64.b64encode(b"admin:secret").decode()
    return {"Authorization": f"Basic {credentials}"}
