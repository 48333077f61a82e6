"""Integration fixtures: need a reachable PostgreSQL configured via DB_* env vars."""
import socket

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings


def _is_reachable(host: str, port: int) -> bool:
    try:
        with socket.create_connection((host, port), timeout=3):
            return True
    except OSError:
        return False


def pytest_collection_modifyitems(items):
    for item in items:
        if "tests/integration" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Settings for the test database; skips the test when none is reachable."""
    try:
        settings = get_settings()
    except ValidationError as e:
        pytest.skip(f"database settings not configured: {e.error_count()} errors")
    if not _is_reachable(settings.db_host, settings.db_port):
        pytest.skip(f"PostgreSQL not reachable at {settings.db_host}:{settings.db_port}")
    return settings
