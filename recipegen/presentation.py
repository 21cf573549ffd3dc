"""
Pure helpers shared by the Streamlit renderers.

Nothing here touches Streamlit, so the rules for what a recipe card shows
can be tested without a running app.
"""

import base64
import binascii
from typing import List, Optional, Tuple

import pandas as pd

from recipegen.models import Recipe
from recipegen.orchestrator import AppState

IMAGE_PENDING = "pending"
IMAGE_READY = "ready"
IMAGE_FAILED = "failed"

VARIATIONS_IDLE = "idle"
VARIATIONS_LOADING = "loading"
VARIATIONS_READY = "ready"

IMAGE_PENDING_LABEL = "جاري تحضير الصورة..."
IMAGE_FAILED_LABEL = "تعذر إنشاء الصورة"
VARIATIONS_BUTTON_LABEL = "اقترح تنويعات!"
VARIATIONS_LOADING_LABEL = "جاري التفكير..."

# (attribute, Arabic label, unit suffix)
_STAT_FIELDS = [
    ("prep_time", "وقت التحضير", ""),
    ("servings", "تكفي لـ", ""),
    ("calories", "السعرات", "سعرة"),
    ("protein", "البروتين", ""),
    ("carbs", "الكربوهيدرات", ""),
    ("fat", "الدهون", ""),
]


def recipe_stats(recipe: Recipe) -> List[Tuple[str, str]]:
    """
    Label/value pairs for the stats row of a recipe card.

    Nutrition entries only appear when the model provided them.

    Returns:
        List of (label, value) tuples in display order
    """
    stats: List[Tuple[str, str]] = []
    for attr, label, unit in _STAT_FIELDS:
        value = getattr(recipe, attr)
        if value is None or not str(value).strip():
            continue
        text = str(value)
        if unit and unit not in text:
            text = f"{text} {unit}"
        stats.append((label, text))
    return stats


def image_status(state: AppState, title: str) -> str:
    """Image state of one recipe: pending, ready or failed."""
    if title in state.image_urls:
        return IMAGE_READY
    if state.image_errors.get(title):
        return IMAGE_FAILED
    return IMAGE_PENDING


def variation_status(state: AppState, title: str) -> str:
    """Variations panel state of one recipe: idle, loading or ready."""
    if state.loading_variations.get(title):
        return VARIATIONS_LOADING
    if state.variations.get(title):
        return VARIATIONS_READY
    return VARIATIONS_IDLE


def data_uri_to_bytes(image_url: str) -> Optional[bytes]:
    """
    Decode a "data:<mime>;base64,<payload>" URI.

    Returns:
        The decoded bytes, or None if the URI is not a base64 data URI
    """
    if not image_url or not image_url.startswith("data:"):
        return None
    header, _, payload = image_url.partition(",")
    if not header.endswith(";base64") or not payload:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def comparison_table(recipes: List[Recipe]) -> pd.DataFrame:
    """
    Build a side-by-side comparison of a batch.

    One row per recipe; columns are the Arabic stat labels. Missing nutrition
    values are left empty rather than guessed.
    """
    rows = []
    for recipe in recipes:
        row = {"الوصفة": recipe.title}
        for attr, label, _unit in _STAT_FIELDS:
            row[label] = getattr(recipe, attr) or ""
        rows.append(row)
    columns = ["الوصفة"] + [label for _attr, label, _unit in _STAT_FIELDS]
    return pd.DataFrame(rows, columns=columns)
