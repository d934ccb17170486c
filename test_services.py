"""Tests for the Spoonacular service."""

from unittest.mock import MagicMock

import pytest
import requests

from app_models import ExternalAPIError, IngredientQuery, RecipeRecord, SchemaMismatchError
from app_services import SpoonacularService
from config import Settings
from conftest import PASTA, make_response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.get.return_value = make_response(PASTA)
    return session


def test_uses_settings(session):
    settings = Settings.from_env({
        "SPOONACULAR_API_KEY": "k",
        "SPOONACULAR_BASE_URL": "http://upstream.test",
        "SPOONACULAR_RESULT_COUNT": "3",
        "SPOONACULAR_TIMEOUT": "4",
    })
    service = SpoonacularService.from_settings(settings, session=session)

    service.search_recipes_by_ingredients(IngredientQuery("rice"))

    args, kwargs = session.get.call_args
    assert args[0] == "http://upstream.test/recipes/findByIngredients"
    assert kwargs["params"] == {"ingredients": "rice", "number": 3, "apiKey": "k"}
    assert kwargs["timeout"] == 4.0


def test_returns_body_unchanged(session):
    body = [{"id": 9, "title": "Soup", "image": "s.jpg", "usedIngredientCount": 2}]
    session.get.return_value = make_response(body)
    service = SpoonacularService("k", session=session)

    result = service.search_recipes_by_ingredients(IngredientQuery("leek"))

    assert result.content == session.get.return_value.content
    assert result.recipes == [RecipeRecord(id=9, title="Soup", image="s.jpg")]


def test_http_error_raises_external_error(session):
    session.get.return_value = make_response({"code": 402}, status_code=402)
    service = SpoonacularService("k", session=session)

    with pytest.raises(ExternalAPIError) as exc_info:
        service.search_recipes_by_ingredients(IngredientQuery("leek"))

    assert exc_info.value.message == "Error fetching recipes"


def test_non_json_raises_external_error(session):
    session.get.return_value = make_response(json_error=ValueError("no json"))
    service = SpoonacularService("k", session=session)

    with pytest.raises(ExternalAPIError):
        service.search_recipes_by_ingredients(IngredientQuery("leek"))


def test_schema_mismatch(session):
    session.get.return_value = make_response({"results": []})
    service = SpoonacularService("k", session=session)

    with pytest.raises(SchemaMismatchError):
        service.search_recipes_by_ingredients(IngredientQuery("leek"))


def test_api_key_not_logged(session, caplog):
    session.get.side_effect = requests.exceptions.HTTPError(
        "401 Client Error for url: http://x/recipes/findByIngredients?apiKey=secret-key"
    )
    service = SpoonacularService("secret-key", session=session)

    with pytest.raises(ExternalAPIError):
        service.search_recipes_by_ingredients(IngredientQuery("leek"))

    assert "secret-key" not in caplog.text
