"""
Session State Management Module.

This module wraps Streamlit's session_state so pages get one
RecipeOrchestrator, one IngredientCapture and the user-entered API key per
browser session, without touching session_state keys directly.

The generation client is chosen from RECIPEGEN_MODE:
- "direct": GeminiClient, called in-process
- "backend": BackendGenerationClient, forwarding to the FastAPI backend

# NOTE: Everything here lives in session_state only. A page refresh starts a
    new session with no recipes and no stored key.
"""

import asyncio
import logging
from typing import Any, Coroutine, Optional

import streamlit as st

from api.config import MODE_BACKEND, AppConfig, GeminiConfig
from recipegen.capture import IngredientCapture
from recipegen.clients.base import BaseGenerationClient
from recipegen.clients.gemini_client import GeminiClient
from recipegen.orchestrator import RecipeOrchestrator
from utils.api_client import BackendGenerationClient, get_backend_credential_status

logger = logging.getLogger(__name__)

ORCHESTRATOR_KEY = "recipe_orchestrator"
CAPTURE_KEY = "ingredient_capture"
USER_API_KEY = "user_api_key"


def get_user_api_key() -> Optional[str]:
    return st.session_state.get(USER_API_KEY) or None


def has_credential() -> bool:
    """
    Whether a usable credential is available for the current mode.

    In backend mode an unreachable backend counts as "available": the
    generation call itself will then report the connection failure.
    """
    if get_user_api_key():
        return True
    if AppConfig.get_mode() == MODE_BACKEND:
        configured = get_backend_credential_status()
        return configured is not False
    return GeminiConfig.get_api_key() is not None


def build_client() -> BaseGenerationClient:
    """Create the generation client for the configured mode and current key."""
    api_key = get_user_api_key()
    if AppConfig.get_mode() == MODE_BACKEND:
        return BackendGenerationClient(api_key=api_key)
    return GeminiClient(api_key=api_key)


def get_orchestrator() -> RecipeOrchestrator:
    """
    Get the session's orchestrator, creating it on first use.

    The credential gate is evaluated once, when the orchestrator is created;
    afterwards it is only re-engaged by credential failures.
    """
    if ORCHESTRATOR_KEY not in st.session_state:
        orchestrator = RecipeOrchestrator(
            client=build_client(),
            credential_check=has_credential,
            progress_delay=AppConfig.get_progress_delay(),
            key_picker_enabled=AppConfig.key_picker_enabled(),
        )
        orchestrator.check_credential()
        logger.info("Created orchestrator (mode=%s, client=%s)", AppConfig.get_mode(), orchestrator.client.name)
        st.session_state[ORCHESTRATOR_KEY] = orchestrator
    return st.session_state[ORCHESTRATOR_KEY]


def get_capture() -> IngredientCapture:
    if CAPTURE_KEY not in st.session_state:
        st.session_state[CAPTURE_KEY] = IngredientCapture()
    return st.session_state[CAPTURE_KEY]


def set_user_api_key(api_key: str) -> None:
    """
    Store a key entered in the credential gate and use it from now on.

    The key is kept in session state only and never written anywhere else.
    """
    st.session_state[USER_API_KEY] = api_key.strip()
    orchestrator = get_orchestrator()
    orchestrator.client = build_client()
    orchestrator.credential_provided()


def run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run one orchestrator coroutine to completion from the script thread."""
    return asyncio.run(coro)
