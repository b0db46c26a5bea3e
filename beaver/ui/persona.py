"""Handle and city forms plus the persona summary card."""

from __future__ import annotations

import logging
from typing import List, Optional

import streamlit as st

from beaver.schemas import Location, Persona
from beaver.ui.client import ApiError, BeaverApiClient
from beaver.ui.locations import SELECTED_LOCATION_KEY

_LOGGER = logging.getLogger(__name__)

PERSONA_KEY = "_persona"
LOCATIONS_KEY = "_locations"
CITY_KEY = "_city"
_ERROR_KEY = "_last_error"


def ensure_session_state() -> None:
    """Seed the keys the persona, list and map views read."""

    st.session_state.setdefault(PERSONA_KEY, None)
    st.session_state.setdefault(LOCATIONS_KEY, [])
    st.session_state.setdefault(CITY_KEY, "")
    st.session_state.setdefault(SELECTED_LOCATION_KEY, None)
    st.session_state.setdefault(_ERROR_KEY, None)


def current_persona() -> Optional[Persona]:
    return st.session_state.get(PERSONA_KEY)


def current_locations() -> List[Location]:
    return list(st.session_state.get(LOCATIONS_KEY) or [])


def _submit_handle(client: BeaverApiClient, handle: str) -> None:
    handle = handle.strip()
    if not handle:
        st.warning("Enter an X handle first.")
        return
    try:
        with st.spinner("Reading posts and building your persona…"):
            persona = client.generate_persona(handle)
    except ApiError as exc:
        _LOGGER.warning("Persona request failed: %s", exc.message)
        st.session_state[_ERROR_KEY] = exc.message
        return

    st.session_state[PERSONA_KEY] = persona
    st.session_state[LOCATIONS_KEY] = []
    st.session_state[SELECTED_LOCATION_KEY] = None
    st.session_state[_ERROR_KEY] = None


def _submit_city(client: BeaverApiClient, persona: Persona, city: str) -> None:
    city = city.strip()
    if not city:
        st.warning("Enter a city first.")
        return
    try:
        with st.spinner(f"Finding places in {city}…"):
            locations = client.recommend_locations(persona, city)
    except ApiError as exc:
        _LOGGER.warning("Locations request failed: %s", exc.message)
        st.session_state[_ERROR_KEY] = exc.message
        return

    st.session_state[CITY_KEY] = city
    st.session_state[LOCATIONS_KEY] = locations
    st.session_state[SELECTED_LOCATION_KEY] = None
    st.session_state[_ERROR_KEY] = None


def render_persona_card(container, persona: Persona) -> None:
    with container:
        with st.container(border=True):
            image_col, body_col = st.columns([1, 5])
            with image_col:
                if persona.profile_image_url:
                    st.image(persona.profile_image_url, width=80)
            with body_col:
                st.markdown(f"#### {persona.name}")
                if persona.handle:
                    st.caption(f"@{persona.handle}")
                if persona.bio:
                    st.write(persona.bio)

            traits_col, interests_col = st.columns(2)
            with traits_col:
                st.markdown("**Traits**")
                st.markdown("\n".join(f"- {trait}" for trait in persona.traits))
            with interests_col:
                st.markdown("**Interests**")
                st.markdown("\n".join(f"- {interest}" for interest in persona.interests))


def render_persona_section(container, client: BeaverApiClient) -> None:
    """Render the handle form, the persona card and the city form."""

    with container:
        with st.form("persona_form"):
            handle = st.text_input("X handle", placeholder="@username")
            if st.form_submit_button("Build my persona"):
                _submit_handle(client, handle)

        persona = current_persona()
        if persona is not None:
            render_persona_card(st.container(), persona)

            with st.form("city_form"):
                city = st.text_input(
                    "City", value=st.session_state.get(CITY_KEY, ""), placeholder="Toronto"
                )
                if st.form_submit_button("Find places"):
                    _submit_city(client, persona, city)

        error = st.session_state.get(_ERROR_KEY)
        if error:
            st.error(error)


__all__ = [
    "CITY_KEY",
    "LOCATIONS_KEY",
    "PERSONA_KEY",
    "current_locations",
    "current_persona",
    "ensure_session_state",
    "render_persona_card",
    "render_persona_section",
]
