"""
Ingredient and preference capture state.

IngredientCapture holds everything the user enters before submitting: the
free-text draft, the accumulated ingredient list, the selected dietary
restrictions and the requested recipe count. It knows nothing about
Streamlit; the frontend keeps one instance in session state and renders it.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from recipegen.catalog import DIETARY_RESTRICTIONS, get_restriction_by_id, split_transcript
from recipegen.models import (
    DEFAULT_RECIPE_COUNT,
    MAX_RECIPE_COUNT,
    MIN_RECIPE_COUNT,
    GenerationRequest,
)

logger = logging.getLogger(__name__)


@dataclass
class IngredientCapture:
    """
    Capture state for one user.

    Attributes:
        draft: Free-text ingredient being typed
        ingredients: Accumulated ingredients (insertion-ordered, no duplicates)
        dietary_restrictions: Selected restriction labels, in selection order
        recipe_count: Number of recipes to request
    """
    draft: str = ""
    ingredients: List[str] = field(default_factory=list)
    dietary_restrictions: List[str] = field(default_factory=list)
    recipe_count: int = DEFAULT_RECIPE_COUNT

    def add_ingredient(self, name: str) -> bool:
        """
        Add one ingredient if it is non-empty and not already present.

        Returns:
            True if the ingredient was added
        """
        cleaned = (name or "").strip()
        if not cleaned or cleaned in self.ingredients:
            return False
        self.ingredients.append(cleaned)
        return True

    def add_draft(self) -> bool:
        """Add the current draft as an ingredient and clear the draft on success."""
        added = self.add_ingredient(self.draft)
        if added:
            self.draft = ""
        return added

    def add_many(self, names: List[str]) -> List[str]:
        """Add several ingredients, returning the ones that were new."""
        return [name.strip() for name in names if self.add_ingredient(name)]

    def add_from_transcript(self, transcript: str) -> List[str]:
        """
        Append ingredients dictated in a finished utterance.

        The transcript is split on "و"/"and"/commas; only tokens not already
        present are appended.
        """
        added = self.add_many(split_transcript(transcript))
        logger.debug("Transcript added %d ingredients", len(added))
        return added

    def remove_ingredient(self, name: str) -> None:
        self.ingredients = [item for item in self.ingredients if item != name]

    def toggle_restriction(self, restriction_id: str) -> None:
        """Select or deselect a restriction by id. Unknown ids are ignored."""
        restriction = get_restriction_by_id(restriction_id)
        if restriction is None:
            return
        if restriction.label in self.dietary_restrictions:
            self.dietary_restrictions = [r for r in self.dietary_restrictions if r != restriction.label]
        else:
            self.dietary_restrictions.append(restriction.label)

    def set_restrictions(self, labels: List[str]) -> None:
        """Replace the selection, keeping only labels from the fixed catalog."""
        allowed = {r.label for r in DIETARY_RESTRICTIONS}
        selected: List[str] = []
        for label in labels:
            if label in allowed and label not in selected:
                selected.append(label)
        self.dietary_restrictions = selected

    def set_recipe_count(self, count: int) -> None:
        self.recipe_count = min(max(int(count), MIN_RECIPE_COUNT), MAX_RECIPE_COUNT)

    def can_submit(self) -> bool:
        return bool(self.ingredients)

    def build_request(self) -> Optional[GenerationRequest]:
        """
        Build a fresh GenerationRequest.

        Returns:
            The request, or None when the ingredient list is empty
        """
        if not self.can_submit():
            return None
        return GenerationRequest(
            ingredients=list(self.ingredients),
            dietary_restrictions=list(self.dietary_restrictions),
            recipe_count=self.recipe_count,
        )

    def clear(self) -> None:
        """Reset ingredients, draft and restrictions."""
        self.draft = ""
        self.ingredients = []
        self.dietary_restrictions = []
