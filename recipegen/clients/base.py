"""
Base generation client abstract class.

This module defines the interface every generation client implements, so the
orchestrator does not care whether it talks to Gemini directly or goes
through the HTTP backend.

All clients must:
- Return parsed Recipe objects from generate_recipes
- Return a renderable image reference (data URI) or "" from generate_image
- Return prose from generate_variations
- Raise only GenerationError / CredentialError, never raw transport errors
"""

from abc import ABC, abstractmethod
from typing import List

from recipegen.models import DEFAULT_RECIPE_COUNT, Recipe


class BaseGenerationClient(ABC):
    """
    Abstract base class for generation clients.

    Attributes:
        name: Short identifier for the client (e.g., "gemini", "backend")
    """
    name: str

    @abstractmethod
    async def generate_recipes(
        self,
        ingredients: List[str],
        dietary_restrictions: List[str],
        count: int = DEFAULT_RECIPE_COUNT,
    ) -> List[Recipe]:
        """
        Generate recipes constrained to the given ingredients and restrictions.

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport or parse failure
        """
        pass

    @abstractmethod
    async def generate_image(self, recipe_title: str) -> str:
        """
        Generate one illustration for a recipe.

        Returns:
            A data URI on success, or "" on any non-credential failure.

        Raises:
            CredentialError: If the API key is missing or rejected
        """
        pass

    @abstractmethod
    async def generate_variations(self, recipe: Recipe) -> str:
        """
        Suggest 2-3 variations of a recipe as free-form prose.

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport failure or an empty answer
        """
        pass

    @abstractmethod
    async def transcribe_audio(self, audio_bytes: bytes, mime_type: str = "audio/wav") -> str:
        """
        Turn a recorded utterance into text.

        Raises:
            CredentialError: If the API key is missing or rejected
            GenerationError: On transport failure
        """
        pass
