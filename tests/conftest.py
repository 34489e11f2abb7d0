"""Test fixtures and configuration."""

from __future__ import annotations

from typing import Any, Callable, Generator
from unittest.mock import MagicMock, patch

import pytest
import requests

from missive_drafts.config import get_settings
from missive_drafts.services import missive_service


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Drop cached settings and the service singleton between tests."""
    get_settings.cache_clear()
    missive_service._missive_service = None
    yield
    get_settings.cache_clear()
    missive_service._missive_service = None


@pytest.fixture
def make_response() -> Callable[[int, bytes], requests.Response]:
    """Build a real requests.Response with a fully buffered body."""
    def _make(status_code: int, content: bytes) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response._content = content
        response.encoding = "utf-8"
        return response
    return _make


@pytest.fixture
def mock_post(make_response: Callable[[int, bytes], requests.Response]) -> Generator[MagicMock, None, None]:
    """Mock requests.post as used by the Missive service."""
    with patch("missive_drafts.services.missive_service.requests.post") as mock:
        mock.return_value = make_response(200, b'{"status": "delivered"}')
        yield mock


@pytest.fixture
def recipient() -> dict[str, Any]:
    """Sample recipient."""
    return {"name": "John Doe", "address": "recipient@example.com"}


@pytest.fixture
def sender() -> dict[str, Any]:
    """Sample sender."""
    return {"name": "Jane Smith", "address": "sender@company.com"}
