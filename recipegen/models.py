"""
Recipe and request models for the recipe generator.

This module defines the canonical data shapes used throughout the app:

- Recipe: one generated recipe, parsed from the text model's JSON response.
  Mandatory fields are always present; the nutrition estimate fields are
  explicitly nullable because the model is asked for them but may omit them.
- GenerationRequest: one user submission (ingredients, dietary restrictions,
  number of recipes). Built fresh per submission and never persisted.

# NOTE: The wire format produced by the model uses camelCase for the
    preparation time ("prepTime"). Recipe accepts both the wire name and the
    Python name, and dumps with the wire name when by_alias=True so HTTP
    responses keep the same shape as the model output.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Bounds for the number of recipes requested per batch
MIN_RECIPE_COUNT = 1
MAX_RECIPE_COUNT = 5
DEFAULT_RECIPE_COUNT = 3


def _coerce_text(value: Any) -> Any:
    # The model occasionally answers "servings": 4 instead of "4"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def unique_in_order(values: List[str]) -> List[str]:
    """
    Strip each value, drop empties and duplicates, keep first-insertion order.

    Examples:
        >>> unique_in_order([" أرز", "طماطم", "أرز", ""])
        ['أرز', 'طماطم']
    """
    seen = set()
    result: List[str] = []
    for value in values:
        cleaned = (value or "").strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        result.append(cleaned)
    return result


class Recipe(BaseModel):
    """
    A single generated recipe.

    Recipes are immutable once received. The title is the key used by the
    orchestrator's per-recipe maps, so titles must be distinct within one
    batch (see RecipeOrchestrator for how collisions are resolved).
    """
    title: str = Field(..., description="Recipe title")
    description: str = Field(..., description="Short description of the dish")
    ingredients: List[str] = Field(..., description="Ingredient lines, in order")
    instructions: List[str] = Field(..., description="Preparation steps, in order")
    servings: str = Field(..., description="How many people the recipe serves")
    prep_time: str = Field(..., alias="prepTime", description="Time needed to prepare the dish")

    # Nutrition estimate (optional, explicitly nullable)
    calories: Optional[str] = Field(None, description="Estimated total calories")
    protein: Optional[str] = Field(None, description="Estimated protein in grams")
    carbs: Optional[str] = Field(None, description="Estimated carbohydrates in grams")
    fat: Optional[str] = Field(None, description="Estimated fat in grams")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "كبسة دجاج",
                "description": "طبق أرز خليجي تقليدي بالدجاج والبهارات.",
                "ingredients": ["صدر دجاج", "أرز", "بصل", "طماطم"],
                "instructions": ["يقطع البصل ويُحمّر.", "يضاف الدجاج والبهارات.", "يضاف الأرز والماء ويطهى."],
                "servings": "4 أشخاص",
                "prepTime": "60 دقيقة",
                "calories": "650",
                "protein": "40 جرام",
                "carbs": "70 جرام",
                "fat": "18 جرام",
            }
        },
    )

    @field_validator("title", "description", "servings", "prep_time", mode="before")
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _nutrition_fields(cls, value: Any) -> Any:
        value = _coerce_text(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _list_fields(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_coerce_text(item) for item in value]
        return value

    def nutrition(self) -> dict:
        """Return only the nutrition fields the model actually provided."""
        fields = {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }
        return {key: value for key, value in fields.items() if value is not None}


class GenerationRequest(BaseModel):
    """
    One user-initiated generation request.

    Ingredients have set semantics: entries are stripped and duplicates are
    suppressed while keeping the order in which they were first added.
    """
    ingredients: List[str] = Field(default_factory=list, description="Available ingredients")
    dietary_restrictions: List[str] = Field(
        default_factory=list,
        description="Dietary restriction labels that every recipe must respect",
    )
    recipe_count: int = Field(
        DEFAULT_RECIPE_COUNT,
        ge=MIN_RECIPE_COUNT,
        le=MAX_RECIPE_COUNT,
        description="Number of recipes to generate",
    )

    @field_validator("ingredients", "dietary_restrictions", mode="after")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        return unique_in_order(value)

    def is_empty(self) -> bool:
        """True when there is nothing to cook with."""
        return not self.ingredients
