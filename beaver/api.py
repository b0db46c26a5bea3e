"""FastAPI application exposing the persona and locations endpoints."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator, Dict, Iterator, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from beaver.agents import LocationRecommender, PersonaGenerator
from beaver.config import Settings, configure_logging
from beaver.core.google_api import GoogleMapsClient
from beaver.core.llm import LLMClient
from beaver.core.search import SearchClient, clean_handle
from beaver.errors import (
    BeaverError,
    ErrorKind,
    NotFoundFailure,
    UpstreamFailure,
    ValidationFailure,
)
from beaver.schemas import (
    LocationsRequest,
    LocationsResponse,
    PersonaRequest,
    PersonaResponse,
)

_LOGGER = logging.getLogger(__name__)

PERSONA_PATH = "/api/persona"
LOCATIONS_PATH = "/api/locations"

_MESSAGES: Dict[str, Dict[ErrorKind, str]] = {
    PERSONA_PATH: {
        ErrorKind.VALIDATION: "Invalid X handle. Please provide a valid X username.",
        ErrorKind.NOT_FOUND: "Could not find X profile data. Please check the handle and try again.",
        ErrorKind.UPSTREAM: "Failed to generate persona. Please try again later.",
    },
    LOCATIONS_PATH: {
        ErrorKind.VALIDATION: "Invalid request. Please provide both persona and location.",
        ErrorKind.NOT_FOUND: (
            "No suitable locations found. Please try a different location or X profile."
        ),
        ErrorKind.UPSTREAM: "Failed to find recommended locations. Please try again later.",
    },
}
_DEFAULT_MESSAGE = "Request failed. Please try again later."


def _public_message(path: str, kind: ErrorKind) -> str:
    return _MESSAGES.get(path, {}).get(kind, _DEFAULT_MESSAGE)


def _failure_response(path: str, error: BeaverError) -> JSONResponse:
    body = {"success": False, "error": _public_message(path, error.kind)}
    return JSONResponse(body, status_code=error.status_code)


@contextmanager
def _unexpected_as_upstream(stage: str) -> Iterator[None]:
    try:
        yield
    except BeaverError:
        raise
    except Exception as exc:
        raise UpstreamFailure(f"Unexpected failure while {stage}") from exc


def _http_clients(app: FastAPI) -> List[object]:
    state = app.state
    return [
        state.search_client,
        getattr(state.persona_generator, "llm", None),
        getattr(state.recommender, "maps", None),
    ]


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    for client in _http_clients(app):
        close = getattr(client, "close", None)
        if close is not None:
            close()
    _LOGGER.debug("Closed upstream HTTP clients")


def get_search_client(request: Request) -> SearchClient:
    return request.app.state.search_client


def get_persona_generator(request: Request) -> PersonaGenerator:
    return request.app.state.persona_generator


def get_recommender(request: Request) -> LocationRecommender:
    return request.app.state.recommender


def create_app(
    settings: Optional[Settings] = None,
    *,
    search_client: Optional[SearchClient] = None,
    persona_generator: Optional[PersonaGenerator] = None,
    recommender: Optional[LocationRecommender] = None,
) -> FastAPI:
    """Build the API with one set of clients shared across requests."""

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Bespoke Beaver API", version="0.1", lifespan=_lifespan)
    app.state.settings = settings
    app.state.search_client = search_client or SearchClient(
        settings.exa_api_key,
        base_url=settings.exa_base_url,
        timeout=settings.search_timeout,
    )
    app.state.persona_generator = persona_generator or PersonaGenerator(
        LLMClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout,
            base_url=settings.openai_base_url,
        )
    )
    app.state.recommender = recommender or LocationRecommender(
        GoogleMapsClient(
            settings.google_maps_api_key,
            timeout=settings.google_maps_timeout,
            search_radius=settings.google_maps_search_radius,
        ),
        max_locations=settings.max_locations,
    )

    @app.exception_handler(BeaverError)
    async def _handle_beaver_error(request: Request, exc: BeaverError) -> JSONResponse:
        if exc.kind is ErrorKind.UPSTREAM:
            _LOGGER.error(
                "Upstream failure on %s: %s", request.url.path, exc, exc_info=exc
            )
        else:
            _LOGGER.info("Rejected %s request: %s", request.url.path, exc.message)
        return _failure_response(request.url.path, exc)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        _LOGGER.info("Malformed %s request: %s", request.url.path, exc.errors())
        return _failure_response(request.url.path, ValidationFailure("Malformed request body"))

    @app.post(PERSONA_PATH, response_model=PersonaResponse)
    def generate_persona(
        body: PersonaRequest,
        search: SearchClient = Depends(get_search_client),
        generator: PersonaGenerator = Depends(get_persona_generator),
    ) -> JSONResponse:
        handle = clean_handle(body.x_handle or "")
        if not handle:
            raise ValidationFailure("xHandle is required")

        with _unexpected_as_upstream("searching the profile"):
            profile = search.search_profile(handle)
        if not profile.tweets:
            raise NotFoundFailure(f"No profile content found for @{handle}")

        with _unexpected_as_upstream("generating the persona"):
            persona = generator.generate(
                profile.tweets, profile.bio, handle=handle, display_name=profile.name
            )

        persona = persona.model_copy(update={"profile_image_url": profile.profile_image_url})
        return JSONResponse(PersonaResponse(success=True, persona=persona).to_wire())

    @app.post(LOCATIONS_PATH, response_model=LocationsResponse)
    def recommend_locations(
        body: LocationsRequest,
        recommender: LocationRecommender = Depends(get_recommender),
    ) -> JSONResponse:
        city = (body.location or "").strip()
        if body.persona is None or not city:
            raise ValidationFailure("persona and location are required")

        with _unexpected_as_upstream("finding locations"):
            locations = recommender.find_locations(body.persona, city)
        if not locations:
            raise NotFoundFailure(f"No locations matched in {city}")

        return JSONResponse(LocationsResponse(success=True, locations=locations).to_wire())

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/")
    def hello() -> Dict[str, str]:
        return {"message": "Bespoke Beaver service running."}

    return app


__all__ = ["LOCATIONS_PATH", "PERSONA_PATH", "create_app"]
