"""
Tests for ingredient and preference capture.

These tests verify that:
- Ingredients are trimmed and never duplicated
- Dictated transcripts are split on "و", "and" and commas
- Restrictions come only from the fixed catalog
- Submitting with no ingredients produces no request
"""

from recipegen.capture import IngredientCapture
from recipegen.catalog import (
    DIETARY_RESTRICTIONS,
    INGREDIENT_CATEGORIES,
    filter_catalog,
    get_restriction_by_label,
    split_transcript,
)


class TestIngredientList:
    """Test adding and removing ingredients."""

    def test_add_draft_trims_and_clears_draft(self):
        capture = IngredientCapture(draft="  دجاج ")
        assert capture.add_draft()
        assert capture.ingredients == ["دجاج"]
        assert capture.draft == ""

    def test_duplicate_is_not_added(self):
        """Test that adding an existing ingredient leaves the list unchanged."""
        capture = IngredientCapture()
        capture.add_ingredient("أرز")
        capture.add_ingredient("طماطم")
        assert not capture.add_ingredient("أرز")
        assert capture.ingredients == ["أرز", "طماطم"]

    def test_duplicate_draft_is_kept_in_the_box(self):
        capture = IngredientCapture(ingredients=["أرز"], draft="أرز")
        assert not capture.add_draft()
        assert capture.draft == "أرز"

    def test_blank_is_ignored(self):
        capture = IngredientCapture()
        assert not capture.add_ingredient("   ")
        assert capture.ingredients == []

    def test_remove_ingredient(self):
        capture = IngredientCapture(ingredients=["أرز", "دجاج"])
        capture.remove_ingredient("أرز")
        assert capture.ingredients == ["دجاج"]


class TestVoiceTranscript:
    """Test splitting of dictated ingredient lists."""

    def test_split_on_arabic_and_and_commas(self):
        assert split_transcript("دجاج و أرز، طماطم, بصل") == ["دجاج", "أرز", "طماطم", "بصل"]

    def test_split_on_english_and(self):
        assert split_transcript("rice and chicken") == ["rice", "chicken"]

    def test_waw_inside_a_word_is_not_a_delimiter(self):
        """Test that only a standalone و splits the text."""
        assert split_transcript("ورق غار و ثوم") == ["ورق غار", "ثوم"]

    def test_empty_tokens_are_dropped(self):
        assert split_transcript(" ،, ") == []
        assert split_transcript("") == []

    def test_transcript_appends_only_new_ingredients(self):
        capture = IngredientCapture(ingredients=["أرز"])
        added = capture.add_from_transcript("أرز و دجاج و طماطم")
        assert added == ["دجاج", "طماطم"]
        assert capture.ingredients == ["أرز", "دجاج", "طماطم"]


class TestRestrictions:
    """Test dietary restriction selection."""

    def test_toggle_by_id(self):
        capture = IngredientCapture()
        capture.toggle_restriction("vegetarian")
        assert capture.dietary_restrictions == ["نباتي"]
        capture.toggle_restriction("vegetarian")
        assert capture.dietary_restrictions == []

    def test_unknown_id_is_ignored(self):
        capture = IngredientCapture()
        capture.toggle_restriction("keto")
        assert capture.dietary_restrictions == []

    def test_set_restrictions_filters_unknown_labels(self):
        capture = IngredientCapture()
        capture.set_restrictions(["نباتي", "كيتو", "نباتي", "قليل الكربوهيدرات"])
        assert capture.dietary_restrictions == ["نباتي", "قليل الكربوهيدرات"]

    def test_catalog_labels(self):
        assert [r.id for r in DIETARY_RESTRICTIONS] == [
            "vegetarian", "vegan", "gluten-free", "dairy-free", "low-carb",
        ]
        assert get_restriction_by_label("خالي من الألبان").id == "dairy-free"


class TestSubmission:
    """Test request building and clearing."""

    def test_empty_capture_builds_no_request(self):
        capture = IngredientCapture()
        assert not capture.can_submit()
        assert capture.build_request() is None

    def test_request_carries_capture_state(self):
        capture = IngredientCapture(ingredients=["أرز"], dietary_restrictions=["نباتي"])
        capture.set_recipe_count(4)
        request = capture.build_request()
        assert request.ingredients == ["أرز"]
        assert request.dietary_restrictions == ["نباتي"]
        assert request.recipe_count == 4

    def test_request_is_a_fresh_copy(self):
        capture = IngredientCapture(ingredients=["أرز"])
        request = capture.build_request()
        capture.add_ingredient("دجاج")
        assert request.ingredients == ["أرز"]

    def test_recipe_count_is_clamped(self):
        capture = IngredientCapture()
        capture.set_recipe_count(10)
        assert capture.recipe_count == 5
        capture.set_recipe_count(0)
        assert capture.recipe_count == 1

    def test_clear_resets_ingredients_and_restrictions(self):
        capture = IngredientCapture(ingredients=["أرز"], dietary_restrictions=["نباتي"], draft="x")
        capture.clear()
        assert capture.ingredients == []
        assert capture.dietary_restrictions == []
        assert capture.draft == ""


class TestCatalog:
    """Test the ingredient catalog search."""

    def test_empty_term_returns_everything(self):
        assert len(filter_catalog("")) == len(INGREDIENT_CATEGORIES) == 9

    def test_search_drops_empty_categories(self):
        result = dict(filter_catalog("دجاج"))
        assert result["لحوم ودواجن"] == ["صدر دجاج", "فخذ دجاج", "دجاج كامل"]
        assert result["معلبات وصلصات"] == ["مرقة دجاج"]
        assert "خضروات" not in result

    def test_no_match(self):
        assert filter_catalog("xyz") == []
