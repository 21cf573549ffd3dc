"""
Tests for environment-based configuration.
"""

import os
from unittest.mock import patch

import pytest

from api.config import (
    MODE_BACKEND,
    MODE_DIRECT,
    AppConfig,
    GeminiConfig,
    get_required_env_vars,
    validate_required_config,
)


class TestGeminiConfig:

    def test_key_precedence(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "a", "GOOGLE_API_KEY": "b", "API_KEY": "c"}, clear=True):
            assert GeminiConfig.get_api_key() == "a"
        with patch.dict(os.environ, {"GOOGLE_API_KEY": "b", "API_KEY": "c"}, clear=True):
            assert GeminiConfig.get_api_key() == "b"
        with patch.dict(os.environ, {"API_KEY": " c "}, clear=True):
            assert GeminiConfig.get_api_key() == "c"

    def test_blank_key_is_missing(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "  "}, clear=True):
            assert GeminiConfig.get_api_key() is None
            assert get_required_env_vars() == {"gemini_api_key": False}

    def test_model_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert GeminiConfig.get_text_model() == "gemini-2.5-flash"
            assert GeminiConfig.get_image_model() == "imagen-4.0-generate-001"

    def test_validate_required_config(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
                validate_required_config()
        with patch.dict(os.environ, {"GEMINI_API_KEY": "k"}, clear=True):
            validate_required_config()


class TestAppConfig:

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert AppConfig.get_mode() == MODE_DIRECT
            assert AppConfig.get_backend_url() == "http://localhost:8000"
            assert AppConfig.get_progress_delay() == 0.5
            assert AppConfig.key_picker_enabled() is True
            assert AppConfig.get_log_level() == "INFO"

    def test_overrides(self):
        env = {
            "RECIPEGEN_MODE": "Backend",
            "BACKEND_URL": "https://api.example.com/",
            "RECIPEGEN_PROGRESS_DELAY": "0",
            "RECIPEGEN_ENABLE_KEY_PICKER": "0",
        }
        with patch.dict(os.environ, env, clear=True):
            assert AppConfig.get_mode() == MODE_BACKEND
            assert AppConfig.get_backend_url() == "https://api.example.com"
            assert AppConfig.get_progress_delay() == 0.0
            assert AppConfig.key_picker_enabled() is False

    def test_invalid_values_fall_back(self):
        with patch.dict(os.environ, {"RECIPEGEN_MODE": "other", "RECIPEGEN_PROGRESS_DELAY": "soon"}, clear=True):
            assert AppConfig.get_mode() == MODE_DIRECT
            assert AppConfig.get_progress_delay() == 0.5
