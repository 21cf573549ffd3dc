"""
Configuration management for the AI Recipe Generator.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early in both the backend (api/main.py)
and the frontend (streamlit_app/app.py) so .env is loaded before any other
code reads environment variables.

In production .env will usually not exist; load_dotenv() is safe to call and
will no-op, and platform environment variables are used instead.

Environment Variables:
- GEMINI_API_KEY: Gemini API key (GOOGLE_API_KEY and API_KEY are accepted as fallbacks)
- RECIPEGEN_TEXT_MODEL: Optional, defaults to "gemini-2.5-flash"
- RECIPEGEN_IMAGE_MODEL: Optional, defaults to "imagen-4.0-generate-001"
- RECIPEGEN_MODE: Optional, "direct" (call Gemini in-process) or "backend" (call the FastAPI backend)
- RECIPEGEN_ENABLE_KEY_PICKER: Optional, "1"/"0", whether users may enter an API key in the UI
- RECIPEGEN_PROGRESS_DELAY: Optional, seconds spent on the "analyzing" progress step (default 0.5)
- BACKEND_URL: Optional, backend URL (defaults to http://localhost:8000)
- LOG_LEVEL: Optional, defaults to INFO
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

MODE_DIRECT = "direct"
MODE_BACKEND = "backend"
VALID_MODES = (MODE_DIRECT, MODE_BACKEND)

# Checked in order; the first non-empty value wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def load_env_file() -> None:
    """
    Load environment variables from the .env file at the project root.

    Safe to call multiple times. Existing environment variables take
    precedence over values in .env.
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class GeminiConfig:
    """Configuration for the Gemini text and Imagen image models."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get the Gemini API key from the environment.

        Read at call time so a key configured after startup is picked up.

        Returns:
            API key string or None if not set
        """
        for name in API_KEY_ENV_VARS:
            value = os.getenv(name)
            if value and value.strip():
                return value.strip()
        return None

    @staticmethod
    def get_text_model() -> str:
        """Text model used for recipes, variations and transcription."""
        return os.getenv("RECIPEGEN_TEXT_MODEL", "gemini-2.5-flash")

    @staticmethod
    def get_image_model() -> str:
        """Image model used for recipe illustrations."""
        return os.getenv("RECIPEGEN_IMAGE_MODEL", "imagen-4.0-generate-001")


class AppConfig:
    """Configuration for the Streamlit app and the backend."""

    @staticmethod
    def get_mode() -> str:
        """
        Get the frontend's generation mode.

        Returns:
            "direct" or "backend". Unknown values fall back to "direct".
        """
        mode = os.getenv("RECIPEGEN_MODE", MODE_DIRECT).strip().lower()
        return mode if mode in VALID_MODES else MODE_DIRECT

    @staticmethod
    def get_backend_url() -> str:
        """Backend base URL with any trailing slash removed."""
        return os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/")

    @staticmethod
    def get_progress_delay() -> float:
        """Seconds spent on the "analyzing ingredients" step before the text call."""
        raw = os.getenv("RECIPEGEN_PROGRESS_DELAY", "0.5")
        try:
            return max(float(raw), 0.0)
        except ValueError:
            return 0.5

    @staticmethod
    def key_picker_enabled() -> bool:
        """Whether the UI may offer an API key entry when no key is configured."""
        return _env_flag("RECIPEGEN_ENABLE_KEY_PICKER", True)

    @staticmethod
    def get_log_level() -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()


def get_required_env_vars() -> dict:
    """
    Get a dictionary of required environment variables and their status.

    Returns:
        Dictionary with keys:
        - gemini_api_key: bool (True if any accepted key variable is set)
    """
    return {
        "gemini_api_key": GeminiConfig.get_api_key() is not None,
    }


def validate_required_config() -> None:
    """
    Validate that all required environment variables are set.

    Raises:
        RuntimeError: If any required configuration is missing
    """
    missing = []

    if not GeminiConfig.get_api_key():
        missing.append("GEMINI_API_KEY (required for recipe, image and variation generation)")

    if missing:
        raise RuntimeError(
            "Missing required environment variables:\n" +
            "\n".join(f"  - {var}" for var in missing) +
            "\n\nPlease create a .env file at the project root with these variables."
        )


def setup_logging() -> None:
    """Configure root logging once and quiet noisy client libraries."""
    level = getattr(logging, AppConfig.get_log_level(), logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        root_logger.setLevel(level)

    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("google.genai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
