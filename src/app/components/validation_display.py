"""Validation display component for showing squad validation results."""

import streamlit as st

from ...analysis import ValidationResult


def render_validation(result: ValidationResult) -> None:
    """
    Render every validation violation at once.

    Args:
        result: Validation result to display.
    """
    if result.is_valid:
        st.success("Squad is valid and ready to save!")
        return

    st.subheader("Issues")
    for message in result.messages:
        st.error(f"❌ {message}")
