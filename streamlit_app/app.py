"""
AI Recipe Generator - Streamlit Frontend Main Entry Point.

Single-page app: the user lists ingredients and dietary restrictions, the
orchestrator asks Gemini for recipes, the recipe cards render immediately,
and each card's image is filled in as soon as its image call completes.

Run with:
    streamlit run streamlit_app/app.py

The optional System Status page lives in `pages/`.
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and recipegen
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging

import streamlit as st

from api.config import setup_logging
from ui.feedback import working_spinner
from ui.layout import page_header, render_footer
from ui.styles import load_global_styles
from utils.ingredient_input import ACTION_CLEAR, ACTION_SUBMIT, render_ingredient_input
from utils.state import get_capture, get_orchestrator, run_async, set_user_api_key
from utils.ui_components import (
    render_comparison_table,
    render_credential_gate,
    render_error_banner,
    render_loader,
    render_recipe_card,
    render_recipe_image,
)

setup_logging()
logger = logging.getLogger(__name__)

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="مولد الوصفات بالذكاء الاصطناعي",
    page_icon="🍳",
    layout="centered",
    initial_sidebar_state="collapsed",
)

load_global_styles()

orchestrator = get_orchestrator()
capture = get_capture()
state = orchestrator.state

page_header(
    "مولد الوصفات بالذكاء الاصطناعي",
    subtitle="أدخل المكونات المتوفرة لديك ودع الذكاء الاصطناعي يبتكر لك وصفات شهية مع صورها.",
)


def _on_key_submitted(api_key: str) -> None:
    set_user_api_key(api_key)
    st.rerun()


if state.needs_credential:
    render_error_banner(state.error)
    render_credential_gate(_on_key_submitted)
    render_footer()
    st.stop()

action = render_ingredient_input(capture, orchestrator, is_loading=state.is_loading)

if action == ACTION_CLEAR:
    capture.clear()
    orchestrator.clear()
    st.rerun()

if action == ACTION_SUBMIT:
    request = capture.build_request()
    loader = st.empty()
    orchestrator.on_change = lambda s: render_loader(loader, s.progress_step) if s.is_loading else loader.empty()
    try:
        run_async(orchestrator.submit(request))
    finally:
        orchestrator.on_change = None
        loader.empty()
    if state.needs_credential:
        st.rerun()

render_error_banner(state.error)

if state.recipes:
    st.markdown("## 🍽️ وصفاتك")
    render_comparison_table(state)

    image_slots = {}
    for index, recipe in enumerate(state.recipes):
        image_slot, variations_clicked = render_recipe_card(recipe, state, key=str(index))
        image_slots[recipe.title] = image_slot
        if variations_clicked:
            with working_spinner("جاري التفكير..."):
                run_async(orchestrator.request_variations(recipe.title))
            st.rerun()

    if orchestrator.pending_image_titles():
        run_async(orchestrator.generate_images(
            on_result=lambda title: render_recipe_image(image_slots[title], state, title)
        ))
        if state.needs_credential:
            st.rerun()

render_footer()
