"""
Tests for the FastAPI backend.

These tests verify that:
- Generation endpoints return the client's results in the documented shape
- Empty ingredient lists are rejected with 400
- Credential failures map to 401 and other generation failures to 502
- Image failures are not HTTP errors
- The X-API-Key header is forwarded to the client
"""

import base64
import os
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from recipegen.errors import (
    CREDENTIAL_MESSAGE,
    GENERATION_FAILED_MESSAGE,
    CredentialError,
    GenerationError,
    RecipeParseError,
)
from recipegen.models import Recipe


def make_recipe(title):
    return Recipe(
        title=title,
        description="وصف",
        ingredients=["أرز"],
        instructions=["اطبخ."],
        servings="4",
        prep_time="30 دقيقة",
        calories="500",
    )


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def gemini():
    """Patch the client class used by the endpoints and return the instance mock."""
    with patch("api.main.GeminiClient") as mock_class:
        instance = Mock()
        instance.generate_recipes = AsyncMock(return_value=[make_recipe("كبسة")])
        instance.generate_image = AsyncMock(return_value="data:image/png;base64,QQ==")
        instance.generate_variations = AsyncMock(return_value="جرّبها حارة.")
        instance.transcribe_audio = AsyncMock(return_value="دجاج و أرز")
        mock_class.return_value = instance
        instance.mock_class = mock_class
        yield instance


class TestGenerateRecipesEndpoint:
    """Test POST /recipes/generate."""

    def test_success(self, client, gemini):
        response = client.post("/recipes/generate", json={
            "ingredients": ["أرز", "دجاج", "أرز"],
            "dietary_restrictions": ["نباتي"],
            "recipe_count": 2,
        })

        assert response.status_code == 200
        recipes = response.json()["recipes"]
        assert recipes[0]["title"] == "كبسة"
        assert recipes[0]["prepTime"] == "30 دقيقة"
        assert recipes[0]["protein"] is None
        gemini.generate_recipes.assert_awaited_once_with(["أرز", "دجاج"], ["نباتي"], 2)

    def test_empty_ingredients_rejected(self, client, gemini):
        response = client.post("/recipes/generate", json={"ingredients": ["  "]})
        assert response.status_code == 400
        gemini.generate_recipes.assert_not_called()

    def test_recipe_count_out_of_range(self, client, gemini):
        response = client.post("/recipes/generate", json={"ingredients": ["أرز"], "recipe_count": 9})
        assert response.status_code == 422

    def test_credential_failure_is_401(self, client, gemini):
        gemini.generate_recipes.side_effect = CredentialError()
        response = client.post("/recipes/generate", json={"ingredients": ["أرز"]})

        assert response.status_code == 401
        assert response.json()["detail"] == {"kind": "credential", "message": CREDENTIAL_MESSAGE}

    def test_parse_failure_is_502(self, client, gemini):
        gemini.generate_recipes.side_effect = RecipeParseError()
        response = client.post("/recipes/generate", json={"ingredients": ["أرز"]})

        assert response.status_code == 502
        assert response.json()["detail"] == {"kind": "generation", "message": GENERATION_FAILED_MESSAGE}

    def test_duplicate_titles_are_renamed(self, client, gemini):
        gemini.generate_recipes.return_value = [make_recipe("كبسة"), make_recipe("كبسة")]
        response = client.post("/recipes/generate", json={"ingredients": ["أرز"]})
        assert [r["title"] for r in response.json()["recipes"]] == ["كبسة", "كبسة (2)"]

    def test_api_key_header_is_forwarded(self, client, gemini):
        client.post("/recipes/generate", json={"ingredients": ["أرز"]}, headers={"X-API-Key": "user-key"})
        gemini.mock_class.assert_called_once_with(api_key="user-key")


class TestImageEndpoint:
    """Test POST /recipes/image."""

    def test_success(self, client, gemini):
        response = client.post("/recipes/image", json={"title": "كبسة"})
        assert response.status_code == 200
        assert response.json() == {
            "title": "كبسة",
            "image_url": "data:image/png;base64,QQ==",
            "failed": False,
        }

    def test_swallowed_failure_is_200(self, client, gemini):
        gemini.generate_image.return_value = ""
        response = client.post("/recipes/image", json={"title": "كبسة"})
        assert response.status_code == 200
        assert response.json()["failed"] is True
        assert response.json()["image_url"] == ""

    def test_credential_failure_is_401(self, client, gemini):
        gemini.generate_image.side_effect = CredentialError()
        response = client.post("/recipes/image", json={"title": "كبسة"})
        assert response.status_code == 401


class TestVariationsEndpoint:

    def test_success(self, client, gemini):
        recipe = make_recipe("كبسة").model_dump(by_alias=True)
        response = client.post("/recipes/variations", json={"recipe": recipe})

        assert response.status_code == 200
        assert response.json() == {"title": "كبسة", "variations": "جرّبها حارة."}
        sent = gemini.generate_variations.call_args.args[0]
        assert sent.prep_time == "30 دقيقة"

    def test_failure_is_502(self, client, gemini):
        gemini.generate_variations.side_effect = GenerationError("فشل في اقتراح تنويعات.")
        recipe = make_recipe("كبسة").model_dump(by_alias=True)
        response = client.post("/recipes/variations", json={"recipe": recipe})
        assert response.status_code == 502
        assert response.json()["detail"]["kind"] == "generation"


class TestTranscribeEndpoint:

    def test_success_splits_ingredients(self, client, gemini):
        audio = base64.b64encode(b"RIFF").decode("ascii")
        response = client.post("/voice/transcribe", json={"audio_base64": audio, "mime_type": "audio/webm"})

        assert response.status_code == 200
        assert response.json() == {"transcript": "دجاج و أرز", "ingredients": ["دجاج", "أرز"]}
        gemini.transcribe_audio.assert_awaited_once_with(b"RIFF", "audio/webm")

    def test_invalid_base64_is_400(self, client, gemini):
        response = client.post("/voice/transcribe", json={"audio_base64": "not base64!!"})
        assert response.status_code == 400


class TestInfoEndpoints:

    def test_catalog(self, client):
        data = client.get("/catalog").json()
        assert len(data["categories"]) == 9
        assert {"id": "vegetarian", "label": "نباتي"} in data["dietary_restrictions"]

    def test_credentials_status(self, client):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "k"}):
            assert client.get("/credentials/status").json() == {"configured": True}
        with patch.dict(os.environ, {}, clear=True):
            assert client.get("/credentials/status").json() == {"configured": False}

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert "uptime_seconds" in data
        assert "credential_configured" in data

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"

    def test_openapi_tag_descriptions(self, client):
        tags = {tag["name"]: tag["description"] for tag in client.get("/openapi.json").json()["tags"]}
        assert set(tags) == {"recipes", "voice", "catalog", "health"}
        assert tags["voice"] == "Speech-to-text for dictated ingredient lists."
