"""
Pydantic schemas for FastAPI request and response models.

This module defines the request/response bodies of the recipe generator API.
Recipes themselves are serialized with recipegen.models.Recipe so the HTTP
shape matches what the text model returns (camelCase "prepTime").

The schemas include:
- GenerateRecipesRequest / RecipeListResponse: POST /recipes/generate
- ImageRequest / ImageResponse: POST /recipes/image
- VariationsRequest / VariationsResponse: POST /recipes/variations
- TranscribeRequest / TranscribeResponse: POST /voice/transcribe
- CredentialStatus: GET /credentials/status
- CatalogResponse: GET /catalog
- ErrorDetail: the "detail" body of 401/502 responses
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from recipegen.models import DEFAULT_RECIPE_COUNT, MAX_RECIPE_COUNT, MIN_RECIPE_COUNT, Recipe


class GenerateRecipesRequest(BaseModel):
    """
    Input model for generating a batch of recipes.

    Ingredients are stripped and de-duplicated server-side; an empty list
    after cleaning is rejected with 400.
    """
    ingredients: List[str] = Field(..., description="Available ingredients (Arabic or any language)")
    dietary_restrictions: List[str] = Field(
        default_factory=list,
        description="Dietary restriction labels, passed to the model verbatim",
    )
    recipe_count: int = Field(
        DEFAULT_RECIPE_COUNT,
        ge=MIN_RECIPE_COUNT,
        le=MAX_RECIPE_COUNT,
        description="Number of recipes to generate",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ingredients": ["دجاج", "أرز", "طماطم"],
                "dietary_restrictions": ["خالي من الغلوتين"],
                "recipe_count": 3,
            }
        }
    )


class RecipeListResponse(BaseModel):
    """Response model for a generated batch."""
    recipes: List[Recipe] = Field(..., description="Generated recipes, titles unique within the batch")


class ImageRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Recipe title to illustrate")


class ImageResponse(BaseModel):
    """
    Response model for one recipe image.

    Image failures other than credential problems are not HTTP errors: the
    response carries failed=True and an empty image_url.
    """
    title: str = Field(..., description="Recipe title the image belongs to")
    image_url: str = Field("", description="data:image/png;base64,... URI, or empty on failure")
    failed: bool = Field(False, description="True if no image could be generated")


class VariationsRequest(BaseModel):
    recipe: Recipe = Field(..., description="The recipe to vary")


class VariationsResponse(BaseModel):
    title: str = Field(..., description="Recipe title")
    variations: str = Field(..., description="Suggested variations as Arabic prose")


class TranscribeRequest(BaseModel):
    """Input model for transcribing a recorded ingredient list."""
    audio_base64: str = Field(..., min_length=1, description="Base64-encoded audio bytes")
    mime_type: str = Field("audio/wav", description="MIME type of the recording")


class TranscribeResponse(BaseModel):
    transcript: str = Field(..., description="Recognized text")
    ingredients: List[str] = Field(default_factory=list, description="Transcript split into ingredients")


class CredentialStatus(BaseModel):
    configured: bool = Field(..., description="Whether the backend has a Gemini API key configured")


class RestrictionOut(BaseModel):
    id: str = Field(..., description="Stable restriction identifier")
    label: str = Field(..., description="Arabic label")


class CatalogResponse(BaseModel):
    """Ingredient catalog and dietary restriction catalog."""
    categories: Dict[str, List[str]] = Field(..., description="Ingredient names grouped by category")
    dietary_restrictions: List[RestrictionOut] = Field(..., description="Selectable dietary restrictions")


class ErrorDetail(BaseModel):
    kind: str = Field(..., description="'credential' or 'generation'")
    message: str = Field(..., description="Localized user-facing message")
