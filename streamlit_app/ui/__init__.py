"""
UI Styling and Layout Module.

This module provides global CSS styling and layout primitives for the AI
Recipe Generator Streamlit app.
"""

from ui.feedback import show_error, working_spinner
from ui.layout import card, page_header, render_footer, section
from ui.styles import load_global_styles

__all__ = [
    "card",
    "load_global_styles",
    "page_header",
    "render_footer",
    "section",
    "show_error",
    "working_spinner",
]
