"""
Backend API Client Module.

This module is the single place where the Streamlit app talks to the FastAPI
backend. It is used when RECIPEGEN_MODE=backend; in the default "direct" mode
the app calls Gemini in-process and only the status page uses this module.

Key principles:
- Consistent timeouts per endpoint
- Every requests exception is converted to GenerationError / CredentialError
  (HTTP 401/403 -> CredentialError) so the orchestrator never sees raw
  transport errors
- Image failures degrade to "" exactly like the in-process client
- Blocking requests calls run in a worker thread (asyncio.to_thread) so the
  orchestrator can still run image calls concurrently

# NOTE: When adding new endpoints, follow this pattern:
    - Add a method (or function) that takes the parameters the endpoint needs
    - Use requests.get/post with an explicit timeout
    - Map errors through _raise_for_response / _transport_error
"""

import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from api.config import AppConfig
from recipegen.clients.base import BaseGenerationClient
from recipegen.errors import (
    CREDENTIAL_MESSAGE,
    CREDENTIAL_STATUS_CODES,
    GENERATION_FAILED_MESSAGE,
    TRANSCRIPTION_FAILED_MESSAGE,
    VARIATIONS_FAILED_MESSAGE,
    CredentialError,
    GenerationError,
    RecipeParseError,
)
from recipegen.models import DEFAULT_RECIPE_COUNT, Recipe

logger = logging.getLogger(__name__)

# Seconds; recipe text and images can take a while on the model side
RECIPES_TIMEOUT = 120
IMAGE_TIMEOUT = 120
VARIATIONS_TIMEOUT = 60
TRANSCRIBE_TIMEOUT = 60
HEALTH_TIMEOUT = 5


def get_backend_url() -> str:
    """
    Get the backend API base URL.

    Returns:
        Backend URL string with trailing slash removed. Defaults to
        http://localhost:8000 for local development; set BACKEND_URL in
        deployed environments.
    """
    return AppConfig.get_backend_url()


def _detail_message(response: requests.Response, default: str) -> str:
    """Pull the localized message out of a FastAPI error body, if any."""
    try:
        detail = response.json().get("detail")
    except ValueError:
        return default
    if isinstance(detail, dict) and detail.get("message"):
        return detail["message"]
    return default


def _raise_for_response(response: requests.Response, message: str) -> None:
    """
    Raise a classified error for a non-2xx backend response.

    Raises:
        CredentialError: For 401/403
        GenerationError: For any other error status
    """
    if response.ok:
        return
    if response.status_code in CREDENTIAL_STATUS_CODES:
        raise CredentialError(_detail_message(response, CREDENTIAL_MESSAGE))
    logger.warning("Backend returned %s for %s", response.status_code, response.url)
    raise GenerationError(_detail_message(response, message))


class BackendGenerationClient(BaseGenerationClient):
    """
    Generation client that forwards every call to the FastAPI backend.

    An api_key entered in the UI is forwarded in the X-API-Key header;
    otherwise the backend uses its own configured key.
    """
    name = "backend"

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None) -> None:
        self.base_url = (base_url or get_backend_url()).rstrip("/")
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        if self.api_key:
            return {"X-API-Key": self.api_key}
        return {}

    def _post(self, path: str, payload: Dict[str, Any], timeout: int, message: str) -> Dict[str, Any]:
        try:
            response = requests.post(
                f"{self.base_url}{path}",
                json=payload,
                headers=self._headers(),
                timeout=timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Backend timed out on %s", path)
            raise GenerationError(message) from e
        except requests.exceptions.ConnectionError as e:
            logger.error("Cannot connect to backend at %s: %s", self.base_url, e)
            raise GenerationError(message) from e
        except requests.exceptions.RequestException as e:
            logger.error("Backend request to %s failed: %s", path, e)
            raise GenerationError(message) from e

        _raise_for_response(response, message)
        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(message) from e
        if not isinstance(data, dict):
            logger.error("Backend returned a non-object body on %s", path)
            raise RecipeParseError(message)
        return data

    async def generate_recipes(
        self,
        ingredients: List[str],
        dietary_restrictions: List[str],
        count: int = DEFAULT_RECIPE_COUNT,
    ) -> List[Recipe]:
        payload = {
            "ingredients": list(ingredients),
            "dietary_restrictions": list(dietary_restrictions),
            "recipe_count": count,
        }
        data = await asyncio.to_thread(
            self._post, "/recipes/generate", payload, RECIPES_TIMEOUT, GENERATION_FAILED_MESSAGE,
        )
        items = data.get("recipes")
        if not isinstance(items, list) or not items:
            raise RecipeParseError(GENERATION_FAILED_MESSAGE)
        try:
            return [Recipe.model_validate(item) for item in items]
        except ValueError as e:
            raise RecipeParseError(GENERATION_FAILED_MESSAGE) from e

    async def generate_image(self, recipe_title: str) -> str:
        try:
            data = await asyncio.to_thread(
                self._post, "/recipes/image", {"title": recipe_title}, IMAGE_TIMEOUT, GENERATION_FAILED_MESSAGE,
            )
        except CredentialError:
            raise
        except GenerationError as e:
            logger.warning("Backend image call failed for %r: %s", recipe_title, e.message)
            return ""
        return data.get("image_url") or ""

    async def generate_variations(self, recipe: Recipe) -> str:
        payload = {"recipe": recipe.model_dump(by_alias=True)}
        data = await asyncio.to_thread(
            self._post, "/recipes/variations", payload, VARIATIONS_TIMEOUT, VARIATIONS_FAILED_MESSAGE,
        )
        text = (data.get("variations") or "").strip()
        if not text:
            raise GenerationError(VARIATIONS_FAILED_MESSAGE)
        return text

    async def transcribe_audio(self, audio_bytes: bytes, mime_type: str = "audio/wav") -> str:
        payload = {
            "audio_base64": base64.b64encode(audio_bytes).decode("ascii"),
            "mime_type": mime_type,
        }
        data = await asyncio.to_thread(
            self._post, "/voice/transcribe", payload, TRANSCRIBE_TIMEOUT, TRANSCRIPTION_FAILED_MESSAGE,
        )
        return (data.get("transcript") or "").strip()


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling the /health endpoint.

    Returns:
        {"status": "ok", "raw": {...}, "docs_url": "/docs"}, or None if the
        backend is unreachable or unhealthy.
    """
    try:
        response = requests.get(f"{get_backend_url()}/health", timeout=HEALTH_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException:
        return None
    except ValueError:
        return None

    if data.get("status") != "ok":
        return None
    return {
        "status": "ok",
        "raw": data,
        "docs_url": f"{get_backend_url()}/docs",
    }


def get_backend_credential_status() -> Optional[bool]:
    """
    Ask the backend whether it has a Gemini API key configured.

    Returns:
        True/False, or None if the backend is unreachable
    """
    try:
        response = requests.get(f"{get_backend_url()}/credentials/status", timeout=HEALTH_TIMEOUT)
        response.raise_for_status()
        return bool(response.json().get("configured"))
    except requests.exceptions.RequestException:
        return None
    except ValueError:
        return None
