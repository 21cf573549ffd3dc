"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication (backend mode and status page)
- state: Session state helpers (orchestrator, capture, user API key)
- ingredient_input: The ingredient and preference capture form
- ui_components: Recipe cards, loader, error banner and credential gate
"""
