"""Shared pytest fixtures for the recipe finder."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from app_services import SpoonacularService
from config import Settings
from main import create_app


PASTA = [{"id": 1, "title": "Pasta", "image": "x.jpg"}]


def make_response(body=None, status_code=200, json_error=None, content=None):
    """Build a stand-in for requests.Response.

    content defaults to the JSON encoding of body; pass raw bytes to pin
    the exact upstream payload.
    """
    response = MagicMock()
    response.status_code = status_code
    if content is None:
        content = b"not json" if json_error is not None else json.dumps(body).encode("utf-8")
    response.content = content
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json.loads(content) if body is None else body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def settings():
    return Settings(spoonacular_api_key="test-key", spoonacular_base_url="https://spoon.test")


@pytest.fixture
def upstream():
    """Stubbed requests.Session used for the outbound call."""
    session = MagicMock(spec=requests.Session)
    session.get.return_value = make_response(PASTA)
    return session


@pytest.fixture
def test_app(settings, upstream):
    """Setup Flask app for testing."""
    service = SpoonacularService.from_settings(settings, session=upstream)
    app = create_app(settings, spoonacular_service=service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(test_app):
    """Create test client."""
    with test_app.test_client() as client:
        yield client
