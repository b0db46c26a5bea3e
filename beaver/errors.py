"""Error taxonomy shared by the clients, agents and HTTP layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Broad failure classes, each mapped to an HTTP status."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM: 500,
}


def error_status(kind: ErrorKind) -> int:
    """Return the HTTP status code used for ``kind``."""

    return _STATUS_BY_KIND[kind]


class BeaverError(RuntimeError):
    """Base class for failures raised by Beaver components."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return error_status(self.kind)


class ValidationFailure(BeaverError):
    """A request was missing required fields or carried bad values."""

    kind = ErrorKind.VALIDATION


class NotFoundFailure(BeaverError):
    """No profile data or no matching locations were found."""

    kind = ErrorKind.NOT_FOUND


class UpstreamFailure(BeaverError):
    """A vendor API failed, a credential was missing or a reply was malformed."""

    kind = ErrorKind.UPSTREAM


class SearchFailure(UpstreamFailure):
    """Raised when the search API cannot be queried."""


class GenerationFailure(UpstreamFailure):
    """Raised when the LLM cannot produce a usable persona."""


class MapsFailure(UpstreamFailure):
    """Raised when the Google Maps API returns an unexpected response."""


__all__ = [
    "BeaverError",
    "ErrorKind",
    "GenerationFailure",
    "MapsFailure",
    "NotFoundFailure",
    "SearchFailure",
    "UpstreamFailure",
    "ValidationFailure",
    "error_status",
]
