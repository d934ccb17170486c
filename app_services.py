"""
Service layer for the Spoonacular call.
"""

import logging
from typing import Any, Dict, Optional

import requests

from app_models import (
    ExternalAPIError,
    IngredientQuery,
    RecipeSearchResult,
    parse_recipe_results,
)
from config import DEFAULT_BASE_URL, DEFAULT_RESULT_COUNT, Settings

logger = logging.getLogger(__name__)


class SpoonacularService:
    """Forward ingredient searches to Spoonacular."""

    SEARCH_PATH = "/recipes/findByIngredients"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        number: int = DEFAULT_RESULT_COUNT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Spoonacular service."""
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.number = number
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "SpoonacularService":
        return cls(
            settings.spoonacular_api_key,
            base_url=settings.spoonacular_base_url,
            number=settings.result_count,
            timeout=settings.request_timeout,
            session=session,
        )

    def build_params(self, query: IngredientQuery) -> Dict[str, Any]:
        return {
            "ingredients": query.ingredients,
            "number": self.number,
            "apiKey": self.api_key,
        }

    def search_recipes_by_ingredients(self, query: IngredientQuery) -> RecipeSearchResult:
        """
        Search recipes by ingredients.

        The raw body is handed back byte for byte once its decoded form has
        been checked against the recipe schema.

        Args:
            query: Validated ingredient query

        Returns:
            RecipeSearchResult with the raw body and the validated records

        Raises:
            ExternalAPIError: If the call fails or the body is not JSON
            SchemaMismatchError: If the body does not look like a recipe list
        """
        url = f"{self.base_url}{self.SEARCH_PATH}"
        try:
            response = self.session.get(url, params=self.build_params(query), timeout=self.timeout)
            response.raise_for_status()
            content = response.content
            data = response.json()
        except requests.exceptions.RequestException as e:
            # str(e) can carry the request URL, and with it the apiKey
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Spoonacular search error: {type(e).__name__} (status={status})")
            raise ExternalAPIError("Error fetching recipes")
        except ValueError as e:
            logger.error(f"Spoonacular returned a non-JSON body: {str(e)}")
            raise ExternalAPIError("Error fetching recipes")

        recipes = parse_recipe_results(data)
        logger.info(f"Spoonacular found {len(recipes)} recipes")
        return RecipeSearchResult(content=content, recipes=recipes)
