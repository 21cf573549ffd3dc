"""
FastAPI application for the AI Recipe Generator API.

This module exposes the generation operations over HTTP so the Streamlit app
(or any other client) can run without holding the Gemini API key itself:
- POST /recipes/generate: Generate a batch of recipes from ingredients
- POST /recipes/image: Generate one illustration for a recipe title
- POST /recipes/variations: Suggest variations of a recipe
- POST /voice/transcribe: Transcribe a recorded ingredient list
- GET /catalog: Ingredient and dietary restriction catalogs
- GET /credentials/status: Whether a Gemini API key is configured

An optional X-API-Key header overrides the key from the environment for one
request. The server keeps no state between requests.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import base64
import binascii
import logging
import time
from typing import Optional

from fastapi import FastAPI, Header, HTTPException, status

from api.config import GeminiConfig, get_required_env_vars, setup_logging
from api.schemas import (
    CatalogResponse,
    CredentialStatus,
    ErrorDetail,
    GenerateRecipesRequest,
    ImageRequest,
    ImageResponse,
    RecipeListResponse,
    RestrictionOut,
    TranscribeRequest,
    TranscribeResponse,
    VariationsRequest,
    VariationsResponse,
)
from recipegen.catalog import DIETARY_RESTRICTIONS, INGREDIENT_CATEGORIES, split_transcript
from recipegen.clients.gemini_client import GeminiClient
from recipegen.errors import CredentialError, GenerationError
from recipegen.models import GenerationRequest
from recipegen.orchestrator import disambiguate_titles

setup_logging()
logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

API_NAME = "AI Recipe Generator API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Backend API generating Arabic recipes, images and variations with Gemini and Imagen"

app = FastAPI(
    title=API_NAME,
    description=API_DESCRIPTION,
    version=API_VERSION,
    openapi_tags=[
        {
            "name": "recipes",
            "description": "Generate recipes, recipe images and recipe variations.",
        },
        {
            "name": "voice",
            "description": "Speech-to-text for dictated ingredient lists.",
        },
        {
            "name": "catalog",
            "description": "Static ingredient and dietary restriction catalogs.",
        },
        {
            "name": "health",
            "description": "Health check and credential status endpoints.",
        },
    ],
)


def get_client(api_key: Optional[str] = None) -> GeminiClient:
    """
    Build a generation client for one request.

    Args:
        api_key: Key from the X-API-Key header (optional, environment otherwise)
    """
    return GeminiClient(api_key=api_key or None)


def _error_response(error: GenerationError) -> HTTPException:
    """
    Map a classified generation error to an HTTPException.

    CredentialError -> 401, any other GenerationError -> 502.
    """
    detail = ErrorDetail(kind=error.kind, message=error.message).model_dump(exclude_none=True)
    if isinstance(error, CredentialError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


@app.post(
    "/recipes/generate",
    response_model=RecipeListResponse,
    tags=["recipes"],
    summary="Generate a batch of recipes",
    description="Generate recipes that only use the given ingredients (plus salt, pepper, water and oil) "
                "and strictly follow the given dietary restrictions.",
)
async def generate_recipes(
    body: GenerateRecipesRequest,
    x_api_key: Optional[str] = Header(None, alias="X-API-Key", description="Gemini API key override"),
) -> RecipeListResponse:
    """
    Generate a batch of recipes.

    Raises:
        HTTPException 400: If the ingredient list is empty after cleaning
        HTTPException 401: If the API key is missing or rejected
        HTTPException 502: If the model call or response parsing fails
    """
    request = GenerationRequest(
        ingredients=body.ingredients,
        dietary_restrictions=body.dietary_restrictions,
        recipe_count=body.recipe_count,
    )
    if request.is_empty():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one ingredient is required.",
        )

    client = get_client(x_api_key)
    try:
        recipes = await client.generate_recipes(
            request.ingredients,
            request.dietary_restrictions,
            request.recipe_count,
        )
    except GenerationError as e:
        logger.warning("Recipe generation failed (%s): %s", e.kind, e.message)
        raise _error_response(e) from e

    return RecipeListResponse(recipes=disambiguate_titles(recipes))


@app.post(
    "/recipes/image",
    response_model=ImageResponse,
    tags=["recipes"],
    summary="Generate an image for a recipe",
    description="Generate one 16:9 PNG illustration. Failures other than credential problems "
                "return 200 with failed=true.",
)
async def generate_image(
    body: ImageRequest,
    x_api_key: Optional[str] = Header(None, alias="X-API-Key", description="Gemini API key override"),
) -> ImageResponse:
    """
    Generate one recipe illustration.

    Raises:
        HTTPException 401: If the API key is missing or rejected
    """
    client = get_client(x_api_key)
    try:
        image_url = await client.generate_image(body.title)
    except CredentialError as e:
        raise _error_response(e) from e

    return ImageResponse(title=body.title, image_url=image_url, failed=not image_url)


@app.post(
    "/recipes/variations",
    response_model=VariationsResponse,
    tags=["recipes"],
    summary="Suggest variations of a recipe",
)
async def generate_variations(
    body: VariationsRequest,
    x_api_key: Optional[str] = Header(None, alias="X-API-Key", description="Gemini API key override"),
) -> VariationsResponse:
    """
    Suggest 2-3 variations of a recipe.

    Raises:
        HTTPException 401: If the API key is missing or rejected
        HTTPException 502: If the model call fails or returns nothing
    """
    client = get_client(x_api_key)
    try:
        text = await client.generate_variations(body.recipe)
    except GenerationError as e:
        logger.warning("Variations failed for %r (%s)", body.recipe.title, e.kind)
        raise _error_response(e) from e

    return VariationsResponse(title=body.recipe.title, variations=text)


@app.post(
    "/voice/transcribe",
    response_model=TranscribeResponse,
    tags=["voice"],
    summary="Transcribe a dictated ingredient list",
)
async def transcribe(
    body: TranscribeRequest,
    x_api_key: Optional[str] = Header(None, alias="X-API-Key", description="Gemini API key override"),
) -> TranscribeResponse:
    """
    Transcribe audio and split the transcript into ingredients.

    Raises:
        HTTPException 400: If the audio is not valid base64
        HTTPException 401: If the API key is missing or rejected
        HTTPException 502: If transcription fails
    """
    try:
        audio_bytes = base64.b64decode(body.audio_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="audio_base64 is not valid base64.",
        ) from e

    client = get_client(x_api_key)
    try:
        transcript = await client.transcribe_audio(audio_bytes, body.mime_type)
    except GenerationError as e:
        raise _error_response(e) from e

    return TranscribeResponse(transcript=transcript, ingredients=split_transcript(transcript))


@app.get("/catalog", response_model=CatalogResponse, tags=["catalog"])
def catalog() -> CatalogResponse:
    """Return the ingredient catalog and the dietary restriction catalog."""
    return CatalogResponse(
        categories=INGREDIENT_CATEGORIES,
        dietary_restrictions=[RestrictionOut(id=r.id, label=r.label) for r in DIETARY_RESTRICTIONS],
    )


@app.get("/credentials/status", response_model=CredentialStatus, tags=["health"])
def credentials_status() -> CredentialStatus:
    """Report whether a Gemini API key is configured on the server."""
    return CredentialStatus(configured=get_required_env_vars()["gemini_api_key"])


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime, credential status and
        model names. Always returns 200 OK if the endpoint is reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)

    return {
        "status": "ok",
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "uptime_seconds": uptime_seconds,
        "credential_configured": get_required_env_vars()["gemini_api_key"],
        "text_model": GeminiConfig.get_text_model(),
        "image_model": GeminiConfig.get_image_model(),
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "docs": "/docs",
    }
