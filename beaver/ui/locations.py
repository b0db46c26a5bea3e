"""List view of recommended locations."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import streamlit as st

from beaver.schemas import Location

SELECTED_LOCATION_KEY = "_selected_location_id"

_CATEGORY_EMOJI: Dict[str, str] = {
    "restaurant": "🍽️",
    "cafe": "☕",
    "bar": "🍸",
    "park": "🌳",
    "museum": "🏛️",
    "shopping": "🛍️",
    "entertainment": "🎭",
    "sports": "🏃",
    "fitness": "💪",
    "education": "📚",
    "work": "💼",
    "tech": "💻",
    "art": "🎨",
    "music": "🎵",
    "outdoor": "🏞️",
    "default": "📍",
}


def category_emoji(category: str) -> str:
    return _CATEGORY_EMOJI.get(category.lower(), _CATEGORY_EMOJI["default"])


def entry_title(location: Location) -> str:
    title = f"**{location.name}**"
    if location.rating is not None:
        title += f" · ★ {location.rating}"
    return title


def select_location(location_id: Optional[str]) -> None:
    """Store ``location_id`` as the selection shared by the list and the map."""

    st.session_state[SELECTED_LOCATION_KEY] = location_id or None


def _render_entry(location: Location, selected: bool, profile_image: Optional[str]) -> None:
    with st.container(border=True):
        glyph_col, body_col = st.columns([1, 8])
        with glyph_col:
            if profile_image:
                st.image(profile_image, width=40)
            else:
                st.markdown(f"### {category_emoji(location.category)}")

        with body_col:
            st.markdown(entry_title(location))
            if location.address:
                st.caption(location.address)
            st.markdown(f"`{category_emoji(location.category)} {location.category}`")
            if location.description:
                st.write(location.description)
            st.button(
                "Selected" if selected else "Show on map",
                key=f"select-location-{location.id}",
                type="primary" if selected else "secondary",
                on_click=select_location,
                args=(location.id,),
            )


def render_location_list(
    container, locations: Sequence[Location], profile_image: Optional[str] = None
) -> None:
    """Render the recommended locations, highlighting the selected entry."""

    with container:
        if not locations:
            st.info("No locations found.")
            return

        st.subheader("Recommended Locations")
        st.caption("Based on your X persona profile")

        selected_id = st.session_state.get(SELECTED_LOCATION_KEY)
        for location in locations:
            _render_entry(location, location.id == selected_id, profile_image)


__all__ = [
    "SELECTED_LOCATION_KEY",
    "category_emoji",
    "entry_title",
    "render_location_list",
    "select_location",
]
