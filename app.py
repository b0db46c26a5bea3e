"""Streamlit entry point for the Bespoke Beaver application."""
from __future__ import annotations

import streamlit as st

from beaver.config import Settings, configure_logging
from beaver.ui import (
    BeaverApiClient,
    current_locations,
    current_persona,
    ensure_session_state,
    render_location_list,
    render_map,
    render_persona_section,
)


@st.cache_resource
def _api_client(base_url: str) -> BeaverApiClient:
    return BeaverApiClient(base_url)


def configure() -> Settings:
    """Configure global Streamlit settings and load environment variables."""

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    st.set_page_config(page_title="Bespoke Beaver | X Persona Location Finder", layout="wide")
    return settings


def render(settings: Settings) -> None:
    """Render the persona form, then the list and map side by side."""

    ensure_session_state()

    st.title("🦫 Bespoke Beaver")
    st.caption("Discover your perfect places based on your X persona")

    render_persona_section(st.container(), _api_client(settings.api_url))

    persona = current_persona()
    locations = current_locations()
    if persona is None or not locations:
        return

    list_col, map_col = st.columns([2, 3])
    render_location_list(list_col, locations, profile_image=persona.profile_image_url)
    render_map(map_col, locations, profile_image=persona.profile_image_url)

    st.divider()
    st.caption("We respect your privacy and do not store any of your personal data.")


if __name__ == "__main__":
    render(configure())
