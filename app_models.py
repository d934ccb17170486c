"""
Data models and validation for the recipe finder.
Handles the ingredient query, the recipe record schema and the error types.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional


class ValidationError(Exception):
    """Custom exception for validation errors."""
    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class ConfigError(Exception):
    """Raised when environment configuration cannot be parsed."""
    pass


class APIError(Exception):
    """Base exception for API errors."""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ExternalAPIError(APIError):
    """Exception for Spoonacular failures (transport, non-2xx, non-JSON)."""
    pass


class SchemaMismatchError(APIError):
    """Spoonacular answered successfully but the body is not a recipe list."""
    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        super().__init__(message, status_code=502)


@dataclass
class IngredientQuery:
    """Validated ingredient text from the query string."""
    ingredients: str

    @staticmethod
    def from_args(args: Mapping[str, Any]) -> "IngredientQuery":
        """
        Create IngredientQuery from request query arguments.

        The raw value is kept as-is; only its presence is checked.

        Raises:
            ValidationError: If ingredients is missing, empty or whitespace
        """
        ingredients = args.get("ingredients")
        if not ingredients or not str(ingredients).strip():
            raise ValidationError("Ingredients are required", "ingredients")
        return IngredientQuery(ingredients=str(ingredients))


@dataclass
class RecipeRecord:
    """A single recipe as returned by findByIngredients."""
    id: int
    title: str
    image: str

    @staticmethod
    def from_spoonacular(data: Any) -> "RecipeRecord":
        """
        Validate one upstream record.

        Raises:
            SchemaMismatchError: If a required field is missing or mistyped
        """
        if not isinstance(data, dict):
            raise SchemaMismatchError(f"recipe record must be an object, got {type(data).__name__}")

        recipe_id = data.get("id")
        # bool is an int subclass
        if not isinstance(recipe_id, int) or isinstance(recipe_id, bool):
            raise SchemaMismatchError(f"recipe id must be an integer, got {recipe_id!r}")

        title = data.get("title")
        if not isinstance(title, str):
            raise SchemaMismatchError(f"recipe {recipe_id} title must be a string")

        image = data.get("image")
        if not isinstance(image, str):
            raise SchemaMismatchError(f"recipe {recipe_id} image must be a string")

        return RecipeRecord(id=recipe_id, title=title, image=image)


def parse_recipe_results(data: Any) -> List[RecipeRecord]:
    """
    Validate a findByIngredients body.

    Args:
        data: Decoded JSON body from Spoonacular

    Returns:
        List of RecipeRecord, in upstream order

    Raises:
        SchemaMismatchError: If the body is not a list of valid records
    """
    if not isinstance(data, list):
        raise SchemaMismatchError(f"expected a list of recipes, got {type(data).__name__}")

    records = []
    for index, item in enumerate(data):
        try:
            records.append(RecipeRecord.from_spoonacular(item))
        except SchemaMismatchError as e:
            raise SchemaMismatchError(f"record {index}: {e.message}", index=index)
    return records


@dataclass
class RecipeSearchResult:
    """Upstream body as received, with the records it was checked against."""
    content: bytes
    recipes: List[RecipeRecord]
