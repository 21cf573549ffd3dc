"""
Top-level state machine for one recipe-generation session.

RecipeOrchestrator owns an explicit AppState and is the only thing that
mutates it. The frontend calls intention-revealing operations (submit,
generate_images, request_variations, clear) and reads the state back to
render.

Flow for one batch:
    submit() -> progress "analyzing" -> pacing delay -> progress "generating"
    -> generate_recipes() -> recipes stored, loading cleared
    generate_images() -> one concurrent image call per recipe, each result
    recorded independently as it completes
    request_variations(title) -> on explicit user action only

Every asynchronous result is written through record_image_result() or
record_variation_result(), which carry the batch id the call was issued
under. A result belonging to an older batch (the user submitted again or
cleared in the meantime) is discarded.

# NOTE: Recipe titles key the per-recipe maps, so titles are made unique
    within a batch before they are stored (" (2)", " (3)", ...).
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from recipegen.clients.base import BaseGenerationClient
from recipegen.errors import (
    CREDENTIAL_CONFIG_MESSAGE,
    ERROR_KIND_CREDENTIAL,
    CredentialError,
    GenerationError,
)
from recipegen.models import GenerationRequest, Recipe

logger = logging.getLogger(__name__)

PROGRESS_ANALYZING = 0
PROGRESS_GENERATING = 1
PROGRESS_STEPS = [
    "جاري تحليل المكونات...",
    "جاري ابتكار مجموعة من الوصفات...",
]

DEFAULT_PROGRESS_DELAY = 0.5


def progress_percentage(step: int) -> float:
    """
    Percentage shown by the progress bar for a step.

    Examples:
        >>> progress_percentage(PROGRESS_ANALYZING)
        50.0
        >>> progress_percentage(PROGRESS_GENERATING)
        100.0
    """
    step = min(max(step, 0), len(PROGRESS_STEPS) - 1)
    return (step + 1) / len(PROGRESS_STEPS) * 100


def progress_label(step: int) -> str:
    step = min(max(step, 0), len(PROGRESS_STEPS) - 1)
    return PROGRESS_STEPS[step]


def disambiguate_titles(recipes: List[Recipe]) -> List[Recipe]:
    """
    Rename later duplicates so every title in the batch is distinct.

    Examples:
        Titles ["كبسة", "كبسة", "سلطة"] become ["كبسة", "كبسة (2)", "سلطة"].
    """
    seen: Set[str] = set()
    result: List[Recipe] = []
    for recipe in recipes:
        title = recipe.title
        suffix = 2
        while title in seen:
            title = f"{recipe.title} ({suffix})"
            suffix += 1
        seen.add(title)
        if title != recipe.title:
            logger.info("Renamed duplicate recipe title %r to %r", recipe.title, title)
            recipe = recipe.model_copy(update={"title": title})
        result.append(recipe)
    return result


@dataclass
class AppState:
    """
    Complete state of the recipe generator for one user session.

    Attributes:
        recipes: Current batch, or None when nothing has been generated
        image_urls: Title -> data URI for images that arrived
        image_errors: Title -> True for images that failed
        variations: Title -> suggested variations text
        loading_variations: Title -> True while a variations call is running
        is_loading: True while the recipe-text call is running
        error: User-facing error message, or None
        error_kind: "credential" / "generation", or None
        progress_step: Index into PROGRESS_STEPS
        batch_id: Incremented on every submit and clear
        needs_credential: True while the credential gate is engaged
        images_in_flight: Titles with an outstanding image call
    """
    recipes: Optional[List[Recipe]] = None
    image_urls: Dict[str, str] = field(default_factory=dict)
    image_errors: Dict[str, bool] = field(default_factory=dict)
    variations: Dict[str, str] = field(default_factory=dict)
    loading_variations: Dict[str, bool] = field(default_factory=dict)
    is_loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None
    progress_step: int = PROGRESS_ANALYZING
    batch_id: int = 0
    needs_credential: bool = False
    images_in_flight: Set[str] = field(default_factory=set)

    def titles(self) -> List[str]:
        return [recipe.title for recipe in self.recipes or []]

    def get_recipe(self, title: str) -> Optional[Recipe]:
        for recipe in self.recipes or []:
            if recipe.title == title:
                return recipe
        return None

    def reset_batch(self) -> None:
        """Drop the current batch and everything derived from it."""
        self.recipes = None
        self.image_urls = {}
        self.image_errors = {}
        self.variations = {}
        self.loading_variations = {}
        self.images_in_flight = set()
        self.error = None
        self.error_kind = None
        self.progress_step = PROGRESS_ANALYZING


class RecipeOrchestrator:
    """
    Drives generation calls and owns the AppState.

    The credential_check callable reports whether a usable credential is
    available right now; it is consulted by check_credential(). When
    key_picker_enabled is False, credential failures show a deployment
    configuration message instead of re-opening the key entry gate.
    """

    def __init__(
        self,
        client: BaseGenerationClient,
        credential_check: Optional[Callable[[], bool]] = None,
        progress_delay: float = DEFAULT_PROGRESS_DELAY,
        on_change: Optional[Callable[[AppState], None]] = None,
        key_picker_enabled: bool = True,
    ) -> None:
        self.client = client
        self.credential_check = credential_check or (lambda: True)
        self.progress_delay = progress_delay
        self.on_change = on_change
        self.key_picker_enabled = key_picker_enabled
        self.state = AppState()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)

    def _handle_credential_failure(self, error: CredentialError) -> None:
        if self.key_picker_enabled:
            self.state.needs_credential = True
            self.state.error = error.message
        else:
            self.state.error = CREDENTIAL_CONFIG_MESSAGE
        self.state.error_kind = ERROR_KIND_CREDENTIAL

    def check_credential(self) -> bool:
        """
        Refresh the credential gate.

        Returns:
            True if a credential is available (gate open)
        """
        try:
            available = bool(self.credential_check())
        except Exception as e:
            logger.error("Credential check failed: %s", e, exc_info=True)
            available = False
        self.state.needs_credential = not available and self.key_picker_enabled
        return available

    def credential_provided(self) -> None:
        """Close the gate after the user supplied a key."""
        self.state.needs_credential = False
        if self.state.error_kind == ERROR_KIND_CREDENTIAL:
            self.state.error = None
            self.state.error_kind = None

    async def submit(self, request: GenerationRequest) -> bool:
        """
        Generate a new batch of recipes.

        An empty request or an engaged credential gate is a no-op.

        Returns:
            True if recipes were stored for this submission
        """
        if request is None or request.is_empty():
            logger.debug("Ignoring submit with no ingredients")
            return False
        if self.state.needs_credential:
            logger.debug("Ignoring submit while the credential gate is engaged")
            return False

        self.state.batch_id += 1
        batch_id = self.state.batch_id
        self.state.reset_batch()
        self.state.is_loading = True
        self._notify()

        logger.info("Batch %d: generating %d recipes from %d ingredients",
                    batch_id, request.recipe_count, len(request.ingredients))

        if self.progress_delay > 0:
            await asyncio.sleep(self.progress_delay)
        if batch_id != self.state.batch_id:
            return False
        self.state.progress_step = PROGRESS_GENERATING
        self._notify()

        try:
            recipes = await self.client.generate_recipes(
                request.ingredients,
                request.dietary_restrictions,
                request.recipe_count,
            )
        except CredentialError as e:
            if batch_id != self.state.batch_id:
                return False
            logger.warning("Batch %d: credential rejected", batch_id)
            self._handle_credential_failure(e)
            self.state.is_loading = False
            self._notify()
            return False
        except GenerationError as e:
            if batch_id != self.state.batch_id:
                return False
            logger.error("Batch %d: recipe generation failed: %s", batch_id, e)
            self.state.error = e.message
            self.state.error_kind = e.kind
            self.state.is_loading = False
            self._notify()
            return False

        if batch_id != self.state.batch_id:
            logger.warning("Discarding recipes for stale batch %d", batch_id)
            return False

        self.state.recipes = disambiguate_titles(recipes)
        self.state.is_loading = False
        logger.info("Batch %d: stored %d recipes", batch_id, len(self.state.recipes))
        self._notify()
        return True

    def pending_image_titles(self) -> List[str]:
        """Titles whose image is neither recorded nor currently requested."""
        state = self.state
        return [
            title for title in state.titles()
            if title not in state.image_urls
            and not state.image_errors.get(title)
            and title not in state.images_in_flight
        ]

    async def _fetch_image(self, batch_id: int, title: str) -> str:
        try:
            try:
                image_url = await self.client.generate_image(title)
            except CredentialError as e:
                if batch_id == self.state.batch_id:
                    self._handle_credential_failure(e)
                image_url = ""
            except Exception as e:
                logger.warning("Image call for %r raised: %s", title, e)
                image_url = ""
            self.record_image_result(batch_id, title, image_url)
            return title
        finally:
            if batch_id == self.state.batch_id:
                self.state.images_in_flight.discard(title)

    async def generate_images(self, on_result: Optional[Callable[[str], None]] = None) -> None:
        """
        Request one image per recipe of the current batch, concurrently.

        Each completion is recorded on its own, in whatever order the calls
        finish. on_result(title) is called after each recorded result that
        still belongs to the current batch.
        """
        titles = self.pending_image_titles()
        if not titles:
            return
        batch_id = self.state.batch_id
        self.state.images_in_flight.update(titles)
        logger.info("Batch %d: requesting %d images", batch_id, len(titles))

        tasks = [asyncio.ensure_future(self._fetch_image(batch_id, title)) for title in titles]
        try:
            for next_done in asyncio.as_completed(tasks):
                title = await next_done
                if on_result is not None and batch_id == self.state.batch_id:
                    on_result(title)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    def record_image_result(self, batch_id: int, title: str, image_url: str) -> bool:
        """
        Store the outcome of one image call.

        An empty image_url marks the image as failed.

        Returns:
            False if the result was discarded (stale batch or unknown title)
        """
        if batch_id != self.state.batch_id or self.state.get_recipe(title) is None:
            logger.warning("Discarding image for %r from stale batch %d", title, batch_id)
            return False
        if image_url:
            self.state.image_urls[title] = image_url
            self.state.image_errors.pop(title, None)
            logger.info("Batch %d: stored image for %r", batch_id, title)
        else:
            self.state.image_errors[title] = True
        self._notify()
        return True

    async def request_variations(self, title: str) -> bool:
        """
        Ask the model for variations of one recipe.

        Returns:
            True if variation text was stored
        """
        recipe = self.state.get_recipe(title)
        if recipe is None:
            return False
        if self.state.loading_variations.get(title):
            return False

        batch_id = self.state.batch_id
        self.state.loading_variations[title] = True
        self._notify()

        text = None
        try:
            text = await self.client.generate_variations(recipe)
        except CredentialError as e:
            if batch_id == self.state.batch_id:
                self._handle_credential_failure(e)
        except GenerationError as e:
            logger.error("Variations failed for %r: %s", title, e)

        return self.record_variation_result(batch_id, title, text)

    def record_variation_result(self, batch_id: int, title: str, text: Optional[str]) -> bool:
        """
        Store the outcome of one variations call and clear its loading flag.

        Returns:
            True if text was stored; False for failures and discarded results
        """
        if batch_id != self.state.batch_id or self.state.get_recipe(title) is None:
            logger.warning("Discarding variations for %r from stale batch %d", title, batch_id)
            return False
        self.state.loading_variations[title] = False
        stored = bool(text and text.strip())
        if stored:
            self.state.variations[title] = text
        self._notify()
        return stored

    def clear(self) -> None:
        """Abandon the current batch and reset to the idle state."""
        self.state.batch_id += 1
        self.state.reset_batch()
        self.state.is_loading = False
        logger.info("Cleared state (batch %d)", self.state.batch_id)
        self._notify()
