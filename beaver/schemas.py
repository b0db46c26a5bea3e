"""Data schemas for the Beaver application."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _WireModel(BaseModel):
    """Base model accepting both camelCase aliases and attribute names."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ChunkInfo(_WireModel):
    """Optional metadata attached to a search chunk."""

    title: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    image_url: Optional[str] = None


class SearchChunk(_WireModel):
    """A snippet of page text returned by the search API."""

    text: str = ""
    url: str = ""
    extra_info: Optional[ChunkInfo] = None

    @field_validator("text", "url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class SearchResult(_WireModel):
    """Raw search API response."""

    chunks: List[SearchChunk] = Field(default_factory=list)
    total_chunk_count: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "SearchResult":
        extra = payload.get("extra_info") or {}
        return cls(
            chunks=payload.get("chunks") or [],
            total_chunk_count=extra.get("total_chunk_count") if isinstance(extra, dict) else None,
        )


class ProfileInfo(_WireModel):
    """Best-effort profile fields scraped from search chunks."""

    tweets: List[str] = Field(default_factory=list)
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    name: Optional[str] = None


class Persona(_WireModel):
    """Structured personality summary derived from public posts."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    handle: str = ""
    bio: str = ""
    traits: List[str]
    interests: List[str]
    profile_image_url: Optional[str] = Field(default=None, alias="profileImageUrl")


class Coordinates(_WireModel):
    lat: float
    lng: float


class Location(_WireModel):
    """A recommended point of interest."""

    id: str
    name: str
    address: str = ""
    description: str = ""
    category: str = "other"
    coordinates: Coordinates
    rating: Optional[float] = None


class PersonaRequest(_WireModel):
    x_handle: Optional[str] = Field(default=None, alias="xHandle")


class PersonaResponse(_WireModel):
    success: bool
    persona: Optional[Persona] = None
    error: Optional[str] = None


class LocationsRequest(_WireModel):
    persona: Optional[Persona] = None
    location: Optional[str] = None


class LocationsResponse(_WireModel):
    success: bool
    locations: Optional[List[Location]] = None
    error: Optional[str] = None


__all__ = [
    "ChunkInfo",
    "Coordinates",
    "Location",
    "LocationsRequest",
    "LocationsResponse",
    "Persona",
    "PersonaRequest",
    "PersonaResponse",
    "ProfileInfo",
    "SearchChunk",
    "SearchResult",
]
