"""Beaver Streamlit UI helpers."""

from __future__ import annotations

from .client import ApiError, BeaverApiClient
from .locations import SELECTED_LOCATION_KEY, render_location_list
from .map import render_map
from .persona import (
    current_locations,
    current_persona,
    ensure_session_state,
    render_persona_section,
)

__all__ = [
    "ApiError",
    "BeaverApiClient",
    "SELECTED_LOCATION_KEY",
    "current_locations",
    "current_persona",
    "ensure_session_state",
    "render_location_list",
    "render_map",
    "render_persona_section",
]
