"""
Shared fixtures for agent tests.
"""

from unittest.mock import MagicMock

import pytest

REASONS = {200: "OK", 400: "Bad Request", 404: "Not Found", 500: "Internal Server Error"}


def _build_response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = REASONS.get(status_code, "")
    if body is None:
        response.json.side_effect = ValueError("No JSON body")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""
    return _build_response


@pytest.fixture
def mock_session():
    """Mocked requests.Session."""
    return MagicMock()
