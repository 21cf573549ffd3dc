"""
Gemini generation client using the google-genai SDK.

This client talks to Google's hosted models:
- Text model (default gemini-2.5-flash) for recipes, variations and transcription
- Image model (default imagen-4.0-generate-001) for recipe illustrations

The client:
- Reads the API key at call time (explicit key first, then the environment)
- Sends the recipe prompt with a declared JSON response schema
- Repairs and parses the recipe response via recipegen.parsing
- Swallows non-credential image failures to "" so a missing image never
  blocks the recipe display
- Converts every SDK or network error into GenerationError / CredentialError

Requires GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) in the environment or
.env file, unless a key is passed explicitly.
"""

import asyncio
import base64
import logging
from typing import Dict, List, Optional

from google import genai
from google.genai import errors, types

from api.config import GeminiConfig
from recipegen.errors import (
    CREDENTIAL_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    IMAGE_MISSING_MESSAGE,
    TRANSCRIPTION_FAILED_MESSAGE,
    VARIATIONS_FAILED_MESSAGE,
    CredentialError,
    GenerationError,
    classify_exception,
)
from recipegen.models import DEFAULT_RECIPE_COUNT, Recipe
from recipegen.parsing import parse_recipes
from recipegen.prompts import (
    RECIPE_RESPONSE_SCHEMA,
    TRANSCRIPTION_PROMPT,
    build_image_prompt,
    build_recipe_prompt,
    build_variations_prompt,
)

from .base import BaseGenerationClient

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPE = "image/png"
IMAGE_ASPECT_RATIO = "16:9"


class GeminiClient(BaseGenerationClient):
    """
    Generation client backed by the Gemini API.

    An explicit api_key (e.g., one entered by the user in the credential gate)
    takes precedence over the environment. Without an explicit key the
    environment is re-read on every call.
    """
    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
    ) -> None:
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key (optional, read from the environment if not provided)
            text_model: Text model name (optional, defaults to RECIPEGEN_TEXT_MODEL)
            image_model: Image model name (optional, defaults to RECIPEGEN_IMAGE_MODEL)
        """
        self.api_key = api_key
        self.text_model = text_model or GeminiConfig.get_text_model()
        self.image_model = image_model or GeminiConfig.get_image_model()
        self._clients: Dict[str, genai.Client] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def has_credential(self) -> bool:
        """True when a key is available for the next call."""
        return bool(self.api_key or GeminiConfig.get_api_key())

    def _get_client(self) -> genai.Client:
        key = self.api_key or GeminiConfig.get_api_key()
        if not key:
            logger.warning("No Gemini API key configured")
            raise CredentialError(CREDENTIAL_MESSAGE)
        # The SDK's async connection pool is bound to the loop that opened it.
        loop = asyncio.get_running_loop()
        if loop is not self._loop:
            self._clients = {}
            self._loop = loop
        client = self._clients.get(key)
        if client is None:
            try:
                client = genai.Client(api_key=key)
            except Exception as e:
                raise classify_exception(e) from e
            self._clients[key] = client
        return client

    async def generate_recipes(
        self,
        ingredients: List[str],
        dietary_restrictions: List[str],
        count: int = DEFAULT_RECIPE_COUNT,
    ) -> List[Recipe]:
        """
        Generate recipes with the text model.

        Returns:
            List of Recipe objects parsed from the model's JSON answer

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport failure; RecipeParseError on bad JSON
        """
        client = self._get_client()
        prompt = build_recipe_prompt(ingredients, dietary_restrictions, count)
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RECIPE_RESPONSE_SCHEMA,
        )

        logger.info("Requesting %d recipes from %s (%d ingredients, %d restrictions)",
                    count, self.text_model, len(ingredients), len(dietary_restrictions))
        try:
            response = await client.aio.models.generate_content(
                model=self.text_model,
                contents=prompt,
                config=config,
            )
        except errors.APIError as e:
            logger.error("Gemini API error generating recipes: %s", e)
            raise classify_exception(e, GENERATION_FAILED_MESSAGE) from e
        except Exception as e:
            logger.error("Unexpected error generating recipes: %s", e, exc_info=True)
            raise classify_exception(e, GENERATION_FAILED_MESSAGE) from e

        recipes = parse_recipes(response.text or "")
        logger.info("Received %d recipes from %s", len(recipes), self.text_model)
        return recipes

    async def generate_image(self, recipe_title: str) -> str:
        """
        Generate one 16:9 PNG illustration for a recipe title.

        Returns:
            "data:image/png;base64,..." on success, "" on any non-credential failure

        Raises:
            CredentialError: If the API key is missing or rejected
        """
        client = self._get_client()
        try:
            response = await client.aio.models.generate_images(
                model=self.image_model,
                prompt=build_image_prompt(recipe_title),
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=IMAGE_MIME_TYPE,
                    aspect_ratio=IMAGE_ASPECT_RATIO,
                ),
            )
            generated = response.generated_images or []
            image_bytes = generated[0].image.image_bytes if generated and generated[0].image else None
            if not image_bytes:
                raise GenerationError(IMAGE_MISSING_MESSAGE)
        except Exception as e:
            classified = classify_exception(e)
            if isinstance(classified, CredentialError):
                logger.warning("Image generation rejected the API key for %r", recipe_title)
                raise classified from e
            # A missing image must never fail the recipe display
            logger.warning("Image generation failed for %r: %s", recipe_title, e)
            return ""

        encoded = base64.b64encode(image_bytes).decode("ascii")
        return f"data:{IMAGE_MIME_TYPE};base64,{encoded}"

    async def generate_variations(self, recipe: Recipe) -> str:
        """
        Suggest variations of a recipe as Arabic prose.

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport failure or an empty answer
        """
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.text_model,
                contents=build_variations_prompt(recipe),
            )
        except Exception as e:
            logger.error("Error generating variations for %r: %s", recipe.title, e)
            raise classify_exception(e, VARIATIONS_FAILED_MESSAGE) from e

        text = (response.text or "").strip()
        if not text:
            raise GenerationError(VARIATIONS_FAILED_MESSAGE)
        return text

    async def transcribe_audio(self, audio_bytes: bytes, mime_type: str = "audio/wav") -> str:
        """
        Transcribe a short recorded ingredient list.

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport failure
        """
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.text_model,
                contents=[
                    types.Part.from_bytes(data=audio_bytes, mime_type=mime_type),
                    TRANSCRIPTION_PROMPT,
                ],
            )
        except Exception as e:
            logger.error("Error transcribing audio: %s", e)
            raise classify_exception(e, TRANSCRIPTION_FAILED_MESSAGE) from e
        return (response.text or "").strip()
