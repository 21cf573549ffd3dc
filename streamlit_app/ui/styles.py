"""
Global CSS Styling for the AI Recipe Generator.

This module provides load_global_styles() to inject consistent styling:
right-to-left layout, an Arabic-friendly font and the emerald palette used
by the recipe cards, loader, error banner and credential gate.
"""

import streamlit as st

EMERALD = "#059669"
EMERALD_DARK = "#047857"
EMERALD_LIGHT = "#d1fae5"


def load_global_styles() -> None:
    """
    Inject global CSS styles for the recipe generator.

    This function:
    - Imports the Cairo font for Arabic typography
    - Switches the main container and widgets to right-to-left
    - Styles headings, buttons and cards with emerald accents
    - Adds the pulsing image placeholder and the failed image indicator
    """
    css = f"""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Cairo:wght@400;600;700&display=swap');

        html, body, [class*="css"] {{
            font-family: 'Cairo', sans-serif !important;
        }}

        /* Right-to-left layout */
        .main, .block-container, [data-testid="stSidebar"], .stMarkdown, .stTextInput, .stMultiSelect {{
            direction: rtl;
            text-align: right;
        }}

        h1, h2, h3, h4 {{
            color: {EMERALD_DARK} !important;
            font-weight: 700 !important;
        }}

        .stButton > button, .stFormSubmitButton > button {{
            border-radius: 50px !important;
            font-weight: 600 !important;
            transition: all 0.2s ease !important;
        }}

        .stButton > button[kind="primary"], .stFormSubmitButton > button[kind="primary"] {{
            background-color: {EMERALD} !important;
            border-color: {EMERALD} !important;
        }}

        .stButton > button[kind="primary"]:hover {{
            background-color: {EMERALD_DARK} !important;
        }}

        .stProgress > div > div > div > div {{
            background-color: {EMERALD} !important;
        }}

        .rg-page-header {{
            text-align: center;
            margin-bottom: 1.5rem;
        }}

        .rg-page-header .subtitle {{
            color: #4b5563;
            font-size: 1.05rem;
        }}

        .rg-section-caption {{
            color: #6b7280;
            margin-bottom: 0.75rem;
        }}

        .rg-loader {{
            text-align: center;
            font-weight: 600;
            color: {EMERALD_DARK};
            margin: 1rem 0 0.5rem 0;
        }}

        .rg-error {{
            background: #fef2f2;
            border: 1px solid #fca5a5;
            color: #b91c1c;
            border-radius: 0.75rem;
            padding: 0.75rem 1rem;
            margin: 1rem 0;
        }}

        .rg-image {{
            aspect-ratio: 16 / 9;
            width: 100%;
            border-radius: 0.75rem;
            display: flex;
            align-items: center;
            justify-content: center;
            font-weight: 600;
        }}

        .rg-image--pending {{
            background: {EMERALD_LIGHT};
            color: {EMERALD_DARK};
            animation: rg-pulse 1.5s ease-in-out infinite;
        }}

        .rg-image--failed {{
            background: #f3f4f6;
            color: #6b7280;
            border: 1px dashed #d1d5db;
        }}

        @keyframes rg-pulse {{
            0%, 100% {{ opacity: 1; }}
            50% {{ opacity: 0.5; }}
        }}

        .rg-variations {{
            white-space: pre-wrap;
            background: #ecfdf5;
            border-radius: 0.75rem;
            padding: 0.75rem 1rem;
            line-height: 1.8;
        }}

        .rg-footer {{
            text-align: center;
            color: #9ca3af;
            font-size: 0.85rem;
            margin-top: 2rem;
        }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
