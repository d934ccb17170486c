"""
Client for the recipe proxy.

RecipeClient talks to GET /api/recipes, RecipeFinder drives one search the
way the browser page does (warn on empty input, alert on errors, otherwise
render cards), and render_recipes builds the HTML for the results container.

Usage:
    python recipe_client.py "tomato, cheese, basil" --base-url http://localhost:3000
"""

import argparse
import logging
import re
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests
from jinja2 import Environment, select_autoescape

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
RECIPE_PAGE_BASE = "https://spoonacular.com/recipes"

EMPTY_INPUT_MESSAGE = "Please enter some ingredients"
TRANSPORT_ERROR_MESSAGE = "An error occurred while fetching recipes."

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

RECIPES_TEMPLATE = _env.from_string(
    """{% if not recipes %}<p>No recipes found</p>{% else %}{% for recipe in recipes %}
<div class="recipe">
    <img src="{{ recipe.image }}" alt="{{ recipe.title }}">
    <h5>{{ recipe.title }}</h5>
    <a href="{{ recipe_page_url(recipe) }}" target="_blank" class="btn btn-primary">View Recipe</a>
</div>{% endfor %}
{% endif %}"""
)


class ClientTransportError(Exception):
    """The proxy could not be reached or did not answer with JSON."""
    pass


def recipe_page_url(recipe: Dict[str, Any]) -> str:
    """Spoonacular page for a recipe, built from its title and id."""
    slug = re.sub(r"\s+", "-", str(recipe.get("title", "")).strip())
    return f"{RECIPE_PAGE_BASE}/{quote(slug, safe='')}-{recipe.get('id')}"


def render_recipes(recipes: Sequence[Dict[str, Any]]) -> str:
    """
    Render recipe records as cards for the results container.

    Args:
        recipes: Records with id, title and image

    Returns:
        HTML fragment; a "No recipes found" paragraph when empty
    """
    return RECIPES_TEMPLATE.render(recipes=list(recipes), recipe_page_url=recipe_page_url)


class RecipeClient:
    """HTTP client for the local recipe proxy."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def search(self, ingredients: str) -> Any:
        """
        Ask the proxy for recipes.

        Error statuses still carry a JSON body, so the body is returned
        whatever the status code.

        Raises:
            ClientTransportError: On network failure or a non-JSON body
        """
        try:
            response = self.session.get(
                f"{self.base_url}/api/recipes",
                params={"ingredients": ingredients},
                timeout=self.timeout,
            )
            return response.json()
        except requests.exceptions.RequestException as e:
            raise ClientTransportError(str(e)) from e
        except ValueError as e:
            raise ClientTransportError(f"Response was not JSON: {e}") from e


class RecipeFinder:
    """One user-triggered search: validate, call, alert or render."""

    def __init__(self, client: RecipeClient, alert: Callable[[str], None]):
        self.client = client
        self.alert = alert

    def find(self, ingredients: str) -> Optional[str]:
        """
        Run a search for the given ingredient text.

        Returns:
            Rendered HTML, or None when an alert was raised instead
        """
        ingredients = (ingredients or "").strip()
        if not ingredients:
            self.alert(EMPTY_INPUT_MESSAGE)
            return None

        try:
            data = self.client.search(ingredients)
        except ClientTransportError as e:
            logger.error(f"Error fetching recipes: {e}")
            self.alert(TRANSPORT_ERROR_MESSAGE)
            return None

        if isinstance(data, dict) and data.get("error"):
            self.alert(str(data["error"]))
            return None

        if not isinstance(data, list):
            logger.error(f"Unexpected response shape: {type(data).__name__}")
            self.alert(TRANSPORT_ERROR_MESSAGE)
            return None

        return render_recipes(data)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find recipes for the ingredients you have.")
    parser.add_argument("ingredients", help="Comma-separated ingredients, e.g. 'tomato, cheese'")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Recipe proxy URL")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    alerts = []

    def alert(message: str) -> None:
        alerts.append(message)
        print(message, file=sys.stderr)

    finder = RecipeFinder(RecipeClient(args.base_url, timeout=args.timeout), alert)
    html = finder.find(args.ingredients)
    if html is not None:
        print(html)
    return 1 if alerts else 0


if __name__ == "__main__":
    sys.exit(main())
