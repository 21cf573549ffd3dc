"""
Reusable UI Components Module.

Renderers for the recipe generator page. They only read the orchestrator's
AppState; every state change goes back through the orchestrator.

Design principles:
- Right-to-left Arabic copy, emerald accents (see ui/styles.py)
- Recipe text shows as soon as it arrives; images fill in per recipe
- A failed image looks different from one that is still pending
"""

import html
from typing import Callable, Optional

import streamlit as st

from recipegen.models import Recipe
from recipegen.orchestrator import AppState, progress_label, progress_percentage
from recipegen.presentation import (
    IMAGE_FAILED,
    IMAGE_FAILED_LABEL,
    IMAGE_PENDING_LABEL,
    IMAGE_READY,
    VARIATIONS_BUTTON_LABEL,
    VARIATIONS_LOADING,
    VARIATIONS_LOADING_LABEL,
    VARIATIONS_READY,
    comparison_table,
    data_uri_to_bytes,
    image_status,
    recipe_stats,
    variation_status,
)
from ui.layout import card

BILLING_URL = "https://ai.google.dev/gemini-api/docs/billing"


def render_loader(placeholder, step: int) -> None:
    """
    Show the progress label and bar for a progress step.

    Args:
        placeholder: st.empty() slot the loader is drawn into
        step: Current progress step
    """
    with placeholder.container():
        st.markdown(
            f'<div class="rg-loader">{html.escape(progress_label(step))}</div>',
            unsafe_allow_html=True,
        )
        st.progress(int(progress_percentage(step)))


def render_error_banner(message: Optional[str]) -> None:
    """Display the error banner ("خطأ! <message>") if there is an error."""
    if not message:
        return
    st.markdown(
        f'<div class="rg-error"><strong>خطأ!</strong> {html.escape(message)}</div>',
        unsafe_allow_html=True,
    )


def render_credential_gate(on_submit: Callable[[str], None]) -> None:
    """
    Render the API key gate.

    Args:
        on_submit: Called with the entered key when the user confirms
    """
    with card("🔑 مطلوب مفتاح API"):
        st.markdown(
            "لاستخدام مولد الوصفات، يرجى إدخال مفتاح Gemini API الخاص بك. "
            "يتطلب توليد الصور مشروعًا مفعّلًا عليه الفوترة."
        )
        st.markdown(f"[معرفة المزيد حول الفوترة]({BILLING_URL})")
        with st.form("credential_gate", clear_on_submit=True):
            api_key = st.text_input("مفتاح API", type="password", placeholder="AIza...")
            submitted = st.form_submit_button("اختر مفتاح API", type="primary", use_container_width=True)

    if submitted:
        if api_key and api_key.strip():
            on_submit(api_key)
        else:
            st.warning("يرجى إدخال مفتاح صالح.")


def render_recipe_image(placeholder, state: AppState, title: str) -> None:
    """
    Draw one recipe's image slot: the image, a pulsing placeholder, or a
    failed indicator.
    """
    status = image_status(state, title)
    if status == IMAGE_READY:
        image_bytes = data_uri_to_bytes(state.image_urls[title])
        if image_bytes is not None:
            placeholder.image(image_bytes, use_container_width=True)
            return
        status = IMAGE_FAILED

    if status == IMAGE_FAILED:
        placeholder.markdown(
            f'<div class="rg-image rg-image--failed">🖼️ {IMAGE_FAILED_LABEL}</div>',
            unsafe_allow_html=True,
        )
    else:
        placeholder.markdown(
            f'<div class="rg-image rg-image--pending">{IMAGE_PENDING_LABEL}</div>',
            unsafe_allow_html=True,
        )


def render_recipe_card(recipe: Recipe, state: AppState, key: str):
    """
    Render one recipe card.

    Args:
        recipe: Recipe to show
        state: Current AppState (image and variation status)
        key: Unique widget key suffix

    Returns:
        (image_placeholder, variations_clicked): the st.empty() slot holding
        the image so it can be updated when the image arrives, and whether
        the variations button was clicked on this run
    """
    with st.container(border=True):
        image_placeholder = st.empty()
        render_recipe_image(image_placeholder, state, recipe.title)

        st.markdown(f"### {html.escape(recipe.title)}")
        st.markdown(html.escape(recipe.description))

        stats = recipe_stats(recipe)
        if stats:
            cols = st.columns(min(len(stats), 3))
            for index, (label, value) in enumerate(stats):
                cols[index % len(cols)].metric(label, value)

        st.markdown("#### المكونات")
        st.markdown("\n".join(f"- {html.escape(item)}" for item in recipe.ingredients))

        st.markdown("#### طريقة التحضير")
        st.markdown("\n".join(
            f"{number}. {html.escape(step)}" for number, step in enumerate(recipe.instructions, start=1)
        ))

        st.divider()
        clicked = False
        status = variation_status(state, recipe.title)
        if status == VARIATIONS_READY:
            st.markdown("#### 💡 تنويعات مقترحة")
            st.markdown(
                f'<div class="rg-variations">{html.escape(state.variations[recipe.title])}</div>',
                unsafe_allow_html=True,
            )
        elif status == VARIATIONS_LOADING:
            st.button(VARIATIONS_LOADING_LABEL, key=f"variations_{key}", disabled=True)
        else:
            clicked = st.button(VARIATIONS_BUTTON_LABEL, key=f"variations_{key}")

    return image_placeholder, clicked


def render_comparison_table(state: AppState) -> None:
    """Show a side-by-side table of the batch's stats and nutrition."""
    if not state.recipes or len(state.recipes) < 2:
        return
    with st.expander("📊 مقارنة الوصفات", expanded=False):
        st.dataframe(comparison_table(state.recipes), hide_index=True, use_container_width=True)


def render_backend_status(status: Optional[dict]) -> None:
    """
    Display backend connection status as a status pill.

    Args:
        status: Dictionary from get_health_status() or None if unreachable
    """
    if status and status.get("status") == "ok":
        st.success("🟢 الخادم متصل")
    else:
        st.error("🔴 الخادم غير متاح")
