"""
Tests for the pure presentation helpers behind the recipe cards.
"""

import base64

from recipegen.models import Recipe
from recipegen.orchestrator import AppState
from recipegen.presentation import (
    IMAGE_FAILED,
    IMAGE_PENDING,
    IMAGE_READY,
    VARIATIONS_IDLE,
    VARIATIONS_LOADING,
    VARIATIONS_READY,
    comparison_table,
    data_uri_to_bytes,
    image_status,
    recipe_stats,
    variation_status,
)


def make_recipe(title="كبسة", **extra):
    fields = dict(
        title=title,
        description="وصف",
        ingredients=["أرز"],
        instructions=["اطبخ."],
        servings="4 أشخاص",
        prep_time="45 دقيقة",
    )
    fields.update(extra)
    return Recipe(**fields)


class TestRecipeStats:

    def test_only_present_nutrition_is_shown(self):
        stats = dict(recipe_stats(make_recipe(calories="650", fat="20 جرام")))
        assert stats["وقت التحضير"] == "45 دقيقة"
        assert stats["تكفي لـ"] == "4 أشخاص"
        assert stats["السعرات"] == "650 سعرة"
        assert stats["الدهون"] == "20 جرام"
        assert "البروتين" not in stats
        assert "الكربوهيدرات" not in stats

    def test_no_nutrition(self):
        assert [label for label, _ in recipe_stats(make_recipe())] == ["وقت التحضير", "تكفي لـ"]


class TestStatuses:

    def test_image_status(self):
        state = AppState(image_urls={"أ": "data:x"}, image_errors={"ب": True})
        assert image_status(state, "أ") == IMAGE_READY
        assert image_status(state, "ب") == IMAGE_FAILED
        assert image_status(state, "ج") == IMAGE_PENDING

    def test_variation_status(self):
        state = AppState(variations={"أ": "نص"}, loading_variations={"ب": True, "ج": False})
        assert variation_status(state, "أ") == VARIATIONS_READY
        assert variation_status(state, "ب") == VARIATIONS_LOADING
        assert variation_status(state, "ج") == VARIATIONS_IDLE


class TestDataUri:

    def test_decodes_base64_payload(self):
        uri = "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")
        assert data_uri_to_bytes(uri) == b"\x89PNG"

    def test_rejects_other_urls(self):
        assert data_uri_to_bytes("https://example.com/a.png") is None
        assert data_uri_to_bytes("data:image/png,raw") is None
        assert data_uri_to_bytes("") is None


def test_comparison_table():
    table = comparison_table([make_recipe("أ", calories="500"), make_recipe("ب")])
    assert list(table["الوصفة"]) == ["أ", "ب"]
    assert list(table["السعرات"]) == ["500", ""]
