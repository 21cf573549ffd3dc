"""
Standardized feedback utilities for error and loading states.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


@contextmanager
def working_spinner(label: str = "جاري العمل..."):
    """
    Context manager wrapper for standardized loading spinners.

    Usage:
        with working_spinner("جاري التفكير..."):
            ...
    """
    with st.spinner(label):
        yield
