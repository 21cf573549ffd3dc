"""
Tests for recipe response repair and parsing.

These tests verify that:
- Prose or code fences around the JSON array are trimmed away
- Responses without a bracket pair raise RecipeParseError
- Invalid, empty or non-list payloads raise RecipeParseError
- Optional nutrition fields stay None when the model omits them
"""

import json

import pytest

from recipegen.errors import GENERATION_FAILED_MESSAGE, GenerationError, RecipeParseError
from recipegen.parsing import extract_json_array, parse_recipes


def _recipe_dict(title, **extra):
    data = {
        "title": title,
        "description": "وصف قصير",
        "ingredients": ["أرز", "دجاج"],
        "instructions": ["اغسل الأرز.", "اطبخ الدجاج."],
        "servings": "4",
        "prepTime": "30 دقيقة",
    }
    data.update(extra)
    return data


class TestExtractJsonArray:
    """Test the outermost-bracket repair step."""

    def test_trims_prose_around_array(self):
        """Test that text before the first [ and after the last ] is dropped."""
        body = json.dumps([_recipe_dict("كبسة"), _recipe_dict("سلطة")], ensure_ascii=False)
        text = f"Here you go:\n{body}\nEnjoy!"
        assert extract_json_array(text) == body

    def test_trims_code_fences(self):
        """Test that markdown code fences are removed."""
        text = '```json\n[{"a": 1}]\n```'
        assert extract_json_array(text) == '[{"a": 1}]'

    def test_keeps_nested_brackets(self):
        """Test that inner arrays are kept because the last ] is used."""
        text = 'x [{"a": [1, 2]}] y'
        assert extract_json_array(text) == '[{"a": [1, 2]}]'

    def test_missing_closing_bracket_raises(self):
        """Test that a truncated response is a parse failure."""
        with pytest.raises(RecipeParseError):
            extract_json_array('[{"title": "كبسة"')

    def test_missing_opening_bracket_raises(self):
        with pytest.raises(RecipeParseError):
            extract_json_array('{"title": "كبسة"}]')

    def test_reversed_brackets_raise(self):
        """Test that ] before [ is not treated as an array."""
        with pytest.raises(RecipeParseError):
            extract_json_array("] nothing here [")

    def test_empty_text_raises(self):
        with pytest.raises(RecipeParseError):
            extract_json_array("")


class TestParseRecipes:
    """Test full parsing into Recipe models."""

    def test_parses_wrapped_response(self):
        """Test that a prose-wrapped array yields the recipes in order."""
        body = json.dumps([_recipe_dict("كبسة"), _recipe_dict("سلطة")], ensure_ascii=False)
        recipes = parse_recipes(f"Here you go:\n{body}\nEnjoy!")

        assert [r.title for r in recipes] == ["كبسة", "سلطة"]
        assert recipes[0].prep_time == "30 دقيقة"

    def test_missing_nutrition_is_none(self):
        """Test that absent nutrition fields are None, not empty strings."""
        recipes = parse_recipes(json.dumps([_recipe_dict("كبسة")]))
        recipe = recipes[0]

        assert recipe.calories is None
        assert recipe.protein is None
        assert recipe.carbs is None
        assert recipe.fat is None
        assert recipe.nutrition() == {}

    def test_present_nutrition_is_kept(self):
        recipes = parse_recipes(json.dumps([_recipe_dict("كبسة", calories="650", protein="40 جرام")]))
        assert recipes[0].nutrition() == {"calories": "650", "protein": "40 جرام"}

    def test_numeric_fields_are_coerced_to_text(self):
        """Test that numbers returned for string fields are accepted."""
        recipes = parse_recipes(json.dumps([_recipe_dict("كبسة", servings=4, calories=650)]))
        assert recipes[0].servings == "4"
        assert recipes[0].calories == "650"

    def test_invalid_json_raises(self):
        with pytest.raises(RecipeParseError):
            parse_recipes("[{title: كبسة}]")

    def test_empty_array_raises(self):
        """Test that an empty recipe list counts as a failed generation."""
        with pytest.raises(RecipeParseError):
            parse_recipes("[]")

    def test_missing_required_field_raises(self):
        data = _recipe_dict("كبسة")
        del data["instructions"]
        with pytest.raises(RecipeParseError):
            parse_recipes(json.dumps([data]))

    def test_parse_error_is_generation_error_with_generic_message(self):
        """Test that parse failures surface the generic generation message."""
        with pytest.raises(GenerationError) as exc_info:
            parse_recipes("no json at all")
        assert exc_info.value.message == GENERATION_FAILED_MESSAGE
        assert exc_info.value.kind == "generation"
