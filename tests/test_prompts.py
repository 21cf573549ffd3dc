"""
Tests for prompt construction.
"""

from recipegen.prompts import (
    PANTRY_STAPLES,
    RECIPE_RESPONSE_SCHEMA,
    build_image_prompt,
    build_recipe_prompt,
    build_restrictions_sentence,
    build_variations_prompt,
)
from recipegen.models import Recipe


def make_recipe(title, **extra):
    data = {
        "title": title,
        "description": "وصف",
        "ingredients": ["أرز"],
        "instructions": ["اطبخ."],
        "servings": "4",
        "prepTime": "30 دقيقة",
    }
    data.update(extra)
    return Recipe.model_validate(data)


class TestRecipePrompt:
    """Test the recipe-generation prompt."""

    def test_restriction_label_appears_verbatim(self):
        """Test that a selected restriction is copied into the prompt unchanged."""
        prompt = build_recipe_prompt(["أرز", "طماطم"], ["نباتي"])
        assert "نباتي" in prompt
        assert "بشكل صارم" in prompt

    def test_restrictions_joined_with_arabic_comma(self):
        prompt = build_recipe_prompt(["أرز"], ["نباتي", "خالي من الغلوتين"])
        assert "نباتي، خالي من الغلوتين" in prompt

    def test_no_restriction_sentence_without_restrictions(self):
        prompt = build_recipe_prompt(["أرز"], [])
        assert "بشكل صارم" not in prompt
        assert build_restrictions_sentence([]) == ""

    def test_ingredients_count_and_staples_included(self):
        prompt = build_recipe_prompt(["دجاج", "أرز"], [], count=5)
        assert "دجاج، أرز" in prompt
        assert "5" in prompt
        assert PANTRY_STAPLES in prompt
        assert "JSON" in prompt


class TestOtherPrompts:

    def test_image_prompt_mentions_title(self):
        assert "كبسة دجاج" in build_image_prompt("كبسة دجاج")

    def test_variations_prompt_mentions_title_and_ingredients(self):
        prompt = build_variations_prompt(make_recipe("مقلوبة", ingredients=["باذنجان", "أرز"]))
        assert "مقلوبة" in prompt
        assert "باذنجان" in prompt


def test_response_schema_requires_core_fields():
    """Test that nutrition fields are declared but optional."""
    required = RECIPE_RESPONSE_SCHEMA.items.required
    assert set(required) == {"title", "description", "ingredients", "instructions", "servings", "prepTime"}
    assert "calories" in RECIPE_RESPONSE_SCHEMA.items.properties
