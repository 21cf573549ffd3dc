"""
Parsing and repair of the text model's recipe response.

The model is asked for a bare JSON array, but it sometimes wraps the array in
prose ("Here you go: [...] Enjoy!") or code fences. Before parsing, the
response is trimmed to the outermost bracket pair: everything from the first
"[" to the last "]". A response with no such pair, or whose trimmed content
is not a valid list of recipes, raises RecipeParseError.
"""

import json
import logging
from typing import Any, List

from pydantic import ValidationError

from recipegen.errors import RecipeParseError
from recipegen.models import Recipe

logger = logging.getLogger(__name__)


def extract_json_array(text: str) -> str:
    """
    Trim a model response to its outermost JSON array.

    Args:
        text: Raw response text

    Returns:
        The substring from the first "[" to the last "]" (inclusive)

    Raises:
        RecipeParseError: If the text has no opening bracket, no closing
            bracket, or the closing bracket comes first

    Examples:
        >>> extract_json_array('Here you go:\\n[{"a": 1}]\\nEnjoy!')
        '[{"a": 1}]'
    """
    if not text:
        raise RecipeParseError()
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        logger.warning("No JSON array found in model response (%d chars)", len(text))
        raise RecipeParseError()
    return text[start:end + 1]


def parse_recipes(text: str) -> List[Recipe]:
    """
    Parse a model response into a list of Recipe objects.

    Raises:
        RecipeParseError: If the response cannot be repaired, is not a list of
            objects, fails validation, or contains no recipes
    """
    payload = extract_json_array(text)
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning("Recipe JSON could not be decoded: %s", e)
        raise RecipeParseError() from e

    if not isinstance(data, list):
        raise RecipeParseError()
    if not data:
        logger.warning("Model returned an empty recipe list")
        raise RecipeParseError()

    recipes: List[Recipe] = []
    for index, item in enumerate(data):
        try:
            recipes.append(Recipe.model_validate(item))
        except ValidationError as e:
            logger.warning("Recipe %d failed validation: %s", index, e)
            raise RecipeParseError() from e
    return recipes
