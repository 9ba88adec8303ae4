# tests/conftest.py

"""Shared pytest fixtures for all shop_assistant tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def block_network() -> Generator[None, None, None]:
    """Fail any real outbound HTTP call made through the client layer."""
    with patch(
        "src.clients.base_client.curl_requests.request",
        side_effect=RuntimeError("network access disabled in tests"),
    ):
        yield
