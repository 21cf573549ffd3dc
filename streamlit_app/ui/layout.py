"""
Layout primitives for consistent page structure.

Provides page headers, section headers, cards and the footer.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render a centered page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
    """
    st.markdown('<div class="rg-page-header">', unsafe_allow_html=True)
    st.markdown(f"# {title}")
    if subtitle:
        st.markdown(f'<div class="subtitle">{subtitle}</div>', unsafe_allow_html=True)
    st.markdown('</div>', unsafe_allow_html=True)


def section(title: str, caption: Optional[str] = None) -> None:
    """
    Render a section header with optional caption.

    Args:
        title: Section title
        caption: Optional caption/help text below title
    """
    st.markdown(f"## {title}")
    if caption:
        st.markdown(f'<div class="rg-section-caption">{caption}</div>', unsafe_allow_html=True)


@contextmanager
def card(title: Optional[str] = None):
    """
    Context manager for a bordered card container.

    Usage:
        with card("Card Title"):
            st.write("Card content")
    """
    with st.container(border=True):
        if title:
            st.markdown(f"### {title}")
        yield


def render_footer() -> None:
    st.markdown(
        '<div class="rg-footer">مدعوم بواسطة Gemini و Imagen من Google</div>',
        unsafe_allow_html=True,
    )
