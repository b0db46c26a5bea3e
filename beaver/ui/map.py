"""Interactive map of recommended locations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pydeck as pdk
import streamlit as st

from beaver.schemas import Coordinates, Location
from beaver.ui.locations import SELECTED_LOCATION_KEY, select_location

_MARKER_LAYER_ID = "location-markers"
_LAST_MAP_PICK_KEY = "_locations_map_last_pick"

# Toronto
FALLBACK_CENTER = Coordinates(lat=43.6532, lng=-79.3832)
FALLBACK_ZOOM = 12
SELECTED_ZOOM = 15

_CATEGORY_COLORS: Dict[str, str] = {
    "restaurant": "FF5252",
    "cafe": "FFAB40",
    "bar": "7C4DFF",
    "park": "66BB6A",
    "museum": "FFC107",
    "shopping": "EC407A",
    "entertainment": "448AFF",
    "sports": "26A69A",
    "fitness": "EF5350",
    "education": "5C6BC0",
    "work": "78909C",
    "tech": "42A5F5",
    "art": "AB47BC",
    "music": "26C6DA",
    "outdoor": "9CCC65",
    "default": "757575",
}

_PROFILE_ICON_SIZE = 40


@dataclass(frozen=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @property
    def center(self) -> Coordinates:
        return Coordinates(lat=(self.north + self.south) / 2, lng=(self.east + self.west) / 2)

    @property
    def span(self) -> float:
        return max(self.north - self.south, self.east - self.west)


def category_color(category: str) -> Tuple[int, int, int, int]:
    """Return the RGBA marker colour for ``category``."""

    hex_value = _CATEGORY_COLORS.get(category.lower(), _CATEGORY_COLORS["default"])
    red, green, blue = (int(hex_value[i : i + 2], 16) for i in (0, 2, 4))
    return red, green, blue, 230


def marker_size(selected: bool) -> int:
    return 36 if selected else 28


def compute_bounds(locations: Sequence[Location]) -> Optional[Bounds]:
    if not locations:
        return None
    lats = [location.coordinates.lat for location in locations]
    lngs = [location.coordinates.lng for location in locations]
    return Bounds(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))


def _zoom_for_span(span: float) -> int:
    if span <= 0:
        return SELECTED_ZOOM
    # Roughly one world width (360 degrees) per zoom level zero tile.
    zoom = int(math.log2(360 / span))
    return max(1, min(SELECTED_ZOOM, zoom))


def compute_view_state(
    locations: Sequence[Location],
    *,
    center: Optional[Coordinates] = None,
    selected_id: Optional[str] = None,
) -> pdk.ViewState:
    """Pick the map centre and zoom.

    A selected location wins, then an explicit ``center``, then the middle
    of the bounding box of all locations, then :data:`FALLBACK_CENTER`.
    """

    selected = next((loc for loc in locations if loc.id == selected_id), None)
    if selected is not None:
        return pdk.ViewState(
            latitude=selected.coordinates.lat,
            longitude=selected.coordinates.lng,
            zoom=SELECTED_ZOOM,
        )
    if center is not None:
        return pdk.ViewState(latitude=center.lat, longitude=center.lng, zoom=FALLBACK_ZOOM)

    bounds = compute_bounds(locations)
    if bounds is None:
        return pdk.ViewState(
            latitude=FALLBACK_CENTER.lat, longitude=FALLBACK_CENTER.lng, zoom=FALLBACK_ZOOM
        )
    middle = bounds.center
    return pdk.ViewState(latitude=middle.lat, longitude=middle.lng, zoom=_zoom_for_span(bounds.span))


def _marker_dict(
    location: Location, selected: bool, profile_image: Optional[str]
) -> Dict[str, object]:
    marker: Dict[str, object] = {
        "id": location.id,
        "name": location.name,
        "address": location.address,
        "longitude": location.coordinates.lng,
        "latitude": location.coordinates.lat,
        "selected": selected,
    }
    if profile_image:
        marker["icon_data"] = {
            "url": profile_image,
            "width": _PROFILE_ICON_SIZE,
            "height": _PROFILE_ICON_SIZE,
            "anchorY": _PROFILE_ICON_SIZE // 2,
        }
        marker["size"] = _PROFILE_ICON_SIZE
    else:
        marker["color"] = list(category_color(location.category))
        marker["radius"] = marker_size(selected) // 2
    return marker


def build_markers(
    locations: Sequence[Location],
    selected_id: Optional[str],
    profile_image: Optional[str] = None,
) -> List[Dict[str, object]]:
    return [
        _marker_dict(location, location.id == selected_id, profile_image)
        for location in locations
    ]


def _build_layer(markers: List[Dict[str, object]], profile_image: Optional[str]) -> pdk.Layer:
    if profile_image:
        return pdk.Layer(
            "IconLayer",
            data=markers,
            id=_MARKER_LAYER_ID,
            get_icon="icon_data",
            get_position="[longitude, latitude]",
            get_size="size",
            size_units="pixels",
            pickable=True,
        )
    return pdk.Layer(
        "ScatterplotLayer",
        data=markers,
        id=_MARKER_LAYER_ID,
        get_position="[longitude, latitude]",
        get_fill_color="color",
        get_line_color=[255, 255, 255],
        get_radius="radius",
        radius_units="pixels",
        line_width_min_pixels=2,
        pickable=True,
        stroked=True,
    )


def build_deck(
    locations: Sequence[Location],
    *,
    selected_id: Optional[str] = None,
    profile_image: Optional[str] = None,
    center: Optional[Coordinates] = None,
) -> pdk.Deck:
    markers = build_markers(locations, selected_id, profile_image)
    tooltip = {
        "html": "<b>{name}</b><br/>{address}",
        "style": {"backgroundColor": "#111", "color": "white"},
    }
    return pdk.Deck(
        map_style="https://basemaps.cartocdn.com/gl/positron-gl-style/style.json",
        layers=[_build_layer(markers, profile_image)] if markers else [],
        initial_view_state=compute_view_state(locations, center=center, selected_id=selected_id),
        tooltip=tooltip,
    )


def _selected_from_map(state) -> Optional[str]:
    if not state:
        return None
    selection = getattr(state, "selection", None)
    if not selection:
        selection = state.get("selection") if isinstance(state, dict) else None
    if not selection:
        return None

    objects = selection.get("objects") if isinstance(selection, dict) else getattr(selection, "objects", None)
    if not objects:
        return None

    layer_objects = objects.get(_MARKER_LAYER_ID)
    if not layer_objects:
        return None

    first = layer_objects[0]
    if not isinstance(first, dict):
        return None
    # Streamlit may hand back the picked datum directly or wrapped in "object".
    picked = first.get("object") if isinstance(first.get("object"), dict) else first
    location_id = picked.get("id")
    return str(location_id) if location_id else None


def render_map(
    container,
    locations: Sequence[Location],
    *,
    profile_image: Optional[str] = None,
    center: Optional[Coordinates] = None,
) -> None:
    """Render the location map and sync marker clicks into the shared selection."""

    with container:
        st.session_state.setdefault(SELECTED_LOCATION_KEY, None)
        selected_id = st.session_state.get(SELECTED_LOCATION_KEY)

        deck = build_deck(
            locations, selected_id=selected_id, profile_image=profile_image, center=center
        )
        state = st.pydeck_chart(
            deck,
            selection_mode="single-object",
            on_select="rerun",
            key="locations_map",
        )

        # The chart keeps reporting its last pick, so only a new pick moves the selection.
        picked = _selected_from_map(state)
        if picked and picked != st.session_state.get(_LAST_MAP_PICK_KEY):
            st.session_state[_LAST_MAP_PICK_KEY] = picked
            if picked != selected_id:
                select_location(picked)
                st.rerun()

        selected = next((loc for loc in locations if loc.id == selected_id), None)
        if selected is not None:
            st.caption(f"Selected: {selected.name} · {selected.address}")


__all__ = [
    "Bounds",
    "FALLBACK_CENTER",
    "build_deck",
    "build_markers",
    "category_color",
    "compute_bounds",
    "compute_view_state",
    "marker_size",
    "render_map",
]
