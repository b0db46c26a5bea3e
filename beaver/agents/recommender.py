"""Agent that maps a persona onto points of interest in a city."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from beaver.core.google_api import GoogleMapsClient
from beaver.schemas import Location, Persona

_LOGGER = logging.getLogger(__name__)

FALLBACK_TERM = "things to do"


@dataclass(frozen=True)
class PlaceQuery:
    """A single text search issued on behalf of a persona."""

    term: str
    text: str
    reason: str


QueryBuilder = Callable[[Persona, str], Sequence[PlaceQuery]]


def default_queries(persona: Persona, city: str) -> List[PlaceQuery]:
    """One query per interest, then per trait, without case-insensitive repeats."""

    queries: List[PlaceQuery] = []
    seen: set[str] = set()

    def _add(term: str, reason: str) -> None:
        term = term.strip()
        key = term.lower()
        if not term or key in seen:
            return
        seen.add(key)
        queries.append(PlaceQuery(term=term, text=f"{term} in {city}", reason=reason))

    for interest in persona.interests:
        _add(interest, f"Matches your interest in {interest.strip()}.")
    for trait in persona.traits:
        _add(trait, f"A good fit for your {trait.strip().lower()} side.")
    if not queries:
        _add(FALLBACK_TERM, f"Popular with visitors to {city}.")
    return queries


class LocationRecommender:
    """Finds places in a city whose categories line up with a persona."""

    def __init__(
        self,
        maps: GoogleMapsClient,
        *,
        max_locations: int = 10,
        query_builder: QueryBuilder = default_queries,
    ) -> None:
        self.maps = maps
        self.max_locations = max_locations
        self.query_builder = query_builder

    def find_locations(self, persona: Persona, city: str) -> List[Location]:
        """Return up to ``max_locations`` unique places; empty when nothing matched."""

        city = city.strip()
        queries = list(self.query_builder(persona, city))
        if not queries:
            return []
        # Each query contributes at most an equal share of the slots.
        per_query = max(1, -(-self.max_locations // len(queries)))

        bias = self.maps.geocode(city)
        found: Dict[str, Location] = {}
        for query in queries:
            if len(found) >= self.max_locations:
                break
            taken = 0
            for location in self.maps.find_locations(
                query.text, description=query.reason, location_bias=bias
            ):
                if location.id in found:
                    continue
                found[location.id] = location
                taken += 1
                if taken >= per_query or len(found) >= self.max_locations:
                    break

        _LOGGER.info(
            "Recommended %d locations in %s for @%s", len(found), city, persona.handle or "unknown"
        )
        return list(found.values())


__all__ = ["LocationRecommender", "PlaceQuery", "default_queries"]
