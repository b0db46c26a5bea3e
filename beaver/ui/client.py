"""HTTP client used by the UI to call the Beaver API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from beaver.schemas import Location, LocationsResponse, Persona, PersonaResponse

_LOGGER = logging.getLogger(__name__)

_UNREACHABLE_MESSAGE = "Could not reach the Beaver API. Check that the server is running."


class ApiError(RuntimeError):
    """Raised when the API answers with ``success: false`` or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BeaverApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 120.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client or httpx.Client(timeout=timeout)

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._http_client.post(f"{self.base_url}{path}", json=payload)
        except httpx.HTTPError as exc:
            _LOGGER.warning("API request to %s failed: %s", path, exc)
            raise ApiError(_UNREACHABLE_MESSAGE) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError(_UNREACHABLE_MESSAGE, response.status_code) from exc

        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or "The request failed.", response.status_code)
        return data

    def generate_persona(self, handle: str) -> Persona:
        data = self._post("/api/persona", {"xHandle": handle})
        persona = PersonaResponse.model_validate(data).persona
        if persona is None:
            raise ApiError("The API returned no persona.")
        return persona

    def recommend_locations(self, persona: Persona, city: str) -> List[Location]:
        payload = {"persona": persona.to_wire(), "location": city}
        data = self._post("/api/locations", payload)
        return LocationsResponse.model_validate(data).locations or []


__all__ = ["ApiError", "BeaverApiClient"]
