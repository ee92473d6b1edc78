"""App fixtures for route tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from gutcheck_content.app import create_app


@pytest.fixture
def cosmos() -> MagicMock:
    """Create a Cosmos client stand-in."""
    client = MagicMock()
    client.close = AsyncMock()
    client.database.read = AsyncMock(return_value={"id": "gutcheck-content"})
    return client


@pytest.fixture
def client(cosmos: MagicMock, make_settings) -> Iterator[TestClient]:
    """Run the app with settings and database initialization patched out."""
    with (
        patch("gutcheck_content.app.load_settings", return_value=make_settings()),
        patch("gutcheck_content.app.configure_logging"),
        patch("gutcheck_content.app.init_database", new=AsyncMock(return_value=cosmos)),
    ):
        app = create_app()
        with TestClient(app) as test_client:
            yield test_client
