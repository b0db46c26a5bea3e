"""Thin wrapper around the Google Maps/Places HTTP APIs."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import requests

from beaver.errors import MapsFailure
from beaver.schemas import Coordinates, Location

_GOOGLE_MAPS_BASE_URL = "https://maps.googleapis.com/maps/api"
_DEFAULT_TIMEOUT = 10.0

_LOGGER = logging.getLogger(__name__)

# Google place types folded into the categories the UI knows how to draw.
_TYPE_CATEGORIES: Dict[str, str] = {
    "restaurant": "restaurant",
    "meal_takeaway": "restaurant",
    "meal_delivery": "restaurant",
    "bakery": "cafe",
    "cafe": "cafe",
    "bar": "bar",
    "night_club": "bar",
    "park": "park",
    "campground": "outdoor",
    "natural_feature": "outdoor",
    "tourist_attraction": "entertainment",
    "amusement_park": "entertainment",
    "movie_theater": "entertainment",
    "bowling_alley": "entertainment",
    "casino": "entertainment",
    "museum": "museum",
    "art_gallery": "art",
    "shopping_mall": "shopping",
    "clothing_store": "shopping",
    "book_store": "shopping",
    "store": "shopping",
    "stadium": "sports",
    "gym": "fitness",
    "spa": "fitness",
    "library": "education",
    "university": "education",
    "school": "education",
    "electronics_store": "tech",
    "coworking_space": "work",
}

OTHER_CATEGORY = "other"


def place_category(types: Iterable[str]) -> str:
    """Return the first known category among a place's ``types``."""

    for place_type in types:
        category = _TYPE_CATEGORIES.get(str(place_type))
        if category:
            return category
    return OTHER_CATEGORY


def _normalise_place(result: Dict[str, object], description: str = "") -> Optional[Location]:
    geometry = result.get("geometry") or {}
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(location, dict):
        return None
    lat, lng = location.get("lat"), location.get("lng")
    if lat is None or lng is None:
        return None

    raw_types = result.get("types") or []
    types = [str(item) for item in raw_types] if isinstance(raw_types, list) else [str(raw_types)]

    place_id = result.get("place_id")
    if not place_id:
        return None

    rating = result.get("rating")
    return Location(
        id=str(place_id),
        name=str(result.get("name") or ""),
        address=str(result.get("formatted_address") or result.get("vicinity") or ""),
        description=description,
        category=place_category(types),
        coordinates=Coordinates(lat=float(lat), lng=float(lng)),
        rating=float(rating) if rating is not None else None,
    )


class GoogleMapsClient:
    """Calls the Places Text Search and Geocoding endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        search_radius: int = 10000,
        base_url: str = _GOOGLE_MAPS_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.search_radius = search_radius
        self.base_url = base_url
        self._session = session or requests.Session()

    def _http(self) -> requests.Session:
        return self._session

    def close(self) -> None:
        self._session.close()

    def _request(self, path: str, params: Dict[str, object]) -> Dict[str, object]:
        if not self.api_key:
            raise MapsFailure("GOOGLE_MAPS_API_KEY environment variable is not set")
        params = {**params, "key": self.api_key}
        try:
            response = self._http().get(
                f"{self.base_url.rstrip('/')}/{path.lstrip('/')}",
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise MapsFailure(f"Google Maps request to {path} failed") from exc
        if not isinstance(data, dict):
            raise MapsFailure("Google Maps API returned a non-object payload")
        status = data.get("status")
        if status and status not in {"OK", "ZERO_RESULTS"}:
            message = data.get("error_message") or status
            raise MapsFailure(f"Google Maps API error: {message}")
        return data

    def geocode(self, address: str) -> Optional[Tuple[float, float]]:
        """Resolve ``address`` to a ``(lat, lng)`` pair, or ``None``."""

        data = self._request("geocode/json", {"address": address})
        results = data.get("results") or []
        if not isinstance(results, list) or not results:
            return None
        location = (results[0].get("geometry") or {}).get("location") or {}
        if "lat" not in location or "lng" not in location:
            return None
        return float(location["lat"]), float(location["lng"])

    def find_places(
        self, query: str, location_bias: Optional[Tuple[float, float]] = None
    ) -> List[Dict[str, object]]:
        """Search for places using a free text query."""

        params: Dict[str, object] = {"query": query}
        if location_bias:
            params["location"] = f"{location_bias[0]},{location_bias[1]}"
            params["radius"] = self.search_radius
        data = self._request("place/textsearch/json", params)
        results = data.get("results", [])
        _LOGGER.debug("Text search %r returned %d places", query, len(results))
        return results  # type: ignore[return-value]

    def find_locations(
        self,
        query: str,
        *,
        description: str = "",
        location_bias: Optional[Tuple[float, float]] = None,
    ) -> List[Location]:
        """Run a text search and normalise the mappable results."""

        locations: List[Location] = []
        for result in self.find_places(query, location_bias=location_bias):
            if not isinstance(result, dict):
                continue
            location = _normalise_place(result, description)
            if location is not None:
                locations.append(location)
        return locations


__all__ = [
    "GoogleMapsClient",
    "OTHER_CATEGORY",
    "place_category",
]
