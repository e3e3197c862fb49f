"""Main Streamlit application entry point."""

import sys
from pathlib import Path

# Add project root to path for direct execution
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from src.app.pages import squad_builder
from src.config import Settings, configure_logging

# Navigation
PAGES = {
    "Squad Builder": squad_builder,
}


def main() -> None:
    """Run the main application."""
    configure_logging(Settings.from_env().log_level)

    st.set_page_config(
        page_title="Fantasy Squad Builder",
        page_icon="⚽",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.sidebar.title("Fantasy Squad Builder")
    st.sidebar.markdown("*Pick 15, start 11, stay under budget*")
    st.sidebar.divider()

    # Page selection
    page_name = st.sidebar.radio("Navigation", list(PAGES.keys()), label_visibility="collapsed")

    # Run selected page
    page = PAGES[page_name]
    page.render()


if __name__ == "__main__":
    main()
