"""
Ingredient and preference capture form.

Renders the IngredientCapture held in session state: free-text entry,
voice dictation, a searchable ingredient catalog, dietary restrictions and
the recipe count. Returns the user's action so app.py can hand it to the
orchestrator.
"""

import hashlib
import logging

import streamlit as st

from recipegen.capture import IngredientCapture
from recipegen.catalog import DIETARY_RESTRICTIONS, filter_catalog
from recipegen.errors import CredentialError, GenerationError
from recipegen.models import MAX_RECIPE_COUNT, MIN_RECIPE_COUNT
from recipegen.orchestrator import RecipeOrchestrator
from ui.feedback import show_error, working_spinner

from utils.state import run_async

logger = logging.getLogger(__name__)

ACTION_NONE = None
ACTION_SUBMIT = "submit"
ACTION_CLEAR = "clear"

VOICE_UNSUPPORTED_MESSAGE = "متصفحك لا يدعم ميزة التعرف على الصوت."
LAST_AUDIO_KEY = "last_audio_digest"
CATALOG_COLUMNS = 4


def _render_voice_input(capture: IngredientCapture, orchestrator: RecipeOrchestrator) -> None:
    if not hasattr(st, "audio_input"):
        st.caption(f"🎤 {VOICE_UNSUPPORTED_MESSAGE}")
        return

    audio = st.audio_input("🎤 أملِ المكونات بصوتك", key="voice_input")
    if audio is None:
        return

    audio_bytes = audio.getvalue()
    digest = hashlib.md5(audio_bytes).hexdigest()
    # The widget keeps its value across reruns; transcribe each recording once
    if st.session_state.get(LAST_AUDIO_KEY) == digest:
        return
    st.session_state[LAST_AUDIO_KEY] = digest

    try:
        with working_spinner("جاري الاستماع..."):
            transcript = run_async(
                orchestrator.client.transcribe_audio(audio_bytes, audio.type or "audio/wav")
            )
    except CredentialError as e:
        show_error(e.message)
        return
    except GenerationError as e:
        show_error(e.message)
        return

    added = capture.add_from_transcript(transcript)
    if added:
        st.toast("تمت إضافة: " + "، ".join(added))


def _render_ingredient_chips(capture: IngredientCapture) -> None:
    if not capture.ingredients:
        st.caption("لم تتم إضافة أي مكونات بعد.")
        return
    cols = st.columns(CATALOG_COLUMNS)
    for index, name in enumerate(list(capture.ingredients)):
        if cols[index % CATALOG_COLUMNS].button(f"✕ {name}", key=f"remove_{index}_{name}"):
            capture.remove_ingredient(name)
            st.rerun()


def _render_catalog(capture: IngredientCapture) -> None:
    with st.expander("📚 تصفح المكونات", expanded=False):
        term = st.text_input("ابحث عن مكون", key="catalog_search", placeholder="مثال: دجاج")
        categories = filter_catalog(term)
        if not categories:
            st.caption("لا توجد نتائج.")
            return
        for category, items in categories:
            st.markdown(f"**{category}**")
            cols = st.columns(CATALOG_COLUMNS)
            for index, item in enumerate(items):
                selected = item in capture.ingredients
                label = f"✓ {item}" if selected else item
                if cols[index % CATALOG_COLUMNS].button(label, key=f"catalog_{category}_{item}", disabled=selected):
                    capture.add_ingredient(item)
                    st.rerun()


def render_ingredient_input(
    capture: IngredientCapture,
    orchestrator: RecipeOrchestrator,
    is_loading: bool = False,
):
    """
    Render the capture form.

    Args:
        capture: Session capture state (mutated in place)
        orchestrator: Used for voice transcription through the current client
        is_loading: Disable submission while a batch is being generated

    Returns:
        ACTION_SUBMIT, ACTION_CLEAR or None
    """
    st.markdown("### 🥕 ما المكونات المتوفرة لديك؟")

    with st.form("ingredient_form", clear_on_submit=True):
        col_input, col_add = st.columns([4, 1])
        with col_input:
            draft = st.text_input(
                "مكون",
                placeholder="مثال: دجاج، أرز، طماطم...",
                label_visibility="collapsed",
            )
        with col_add:
            add_clicked = st.form_submit_button("إضافة", use_container_width=True)
    if add_clicked:
        capture.draft = draft
        if not capture.add_draft() and draft.strip():
            st.toast(f"«{draft.strip()}» موجود بالفعل")

    _render_voice_input(capture, orchestrator)
    _render_ingredient_chips(capture)
    _render_catalog(capture)

    st.markdown("### 🥗 هل لديك قيود غذائية؟")
    labels = [r.label for r in DIETARY_RESTRICTIONS]
    selected = st.multiselect(
        "القيود الغذائية",
        options=labels,
        default=[label for label in capture.dietary_restrictions if label in labels],
        label_visibility="collapsed",
        placeholder="اختر القيود (اختياري)",
    )
    capture.set_restrictions(selected)

    count = st.slider(
        "عدد الوصفات",
        min_value=MIN_RECIPE_COUNT,
        max_value=MAX_RECIPE_COUNT,
        value=capture.recipe_count,
    )
    capture.set_recipe_count(count)

    col_submit, col_clear = st.columns([3, 1])
    with col_submit:
        submit = st.button(
            "✨ ابتكر الوصفات",
            type="primary",
            use_container_width=True,
            disabled=is_loading or not capture.can_submit(),
        )
    with col_clear:
        clear = st.button("مسح الكل", use_container_width=True, disabled=is_loading)

    if clear:
        return ACTION_CLEAR
    if submit:
        return ACTION_SUBMIT
    return ACTION_NONE
