"""Client for the Exa search API and profile extraction from its chunks."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, Optional

import httpx

from beaver.errors import SearchFailure
from beaver.schemas import ProfileInfo, SearchChunk, SearchResult

_LOGGER = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://api.exa.ai/search"
DEFAULT_TIMEOUT = 5.0
SEARCH_DOMAINS = ("twitter.com", "x.com")
MAX_RESULTS = 10

_NAME_PATTERN = re.compile(r"^([^(]+)")
_BIO_STOPWORDS = ("Followers", "Following", "Posts")


def clean_handle(handle: str) -> str:
    """Strip a single leading ``@`` from ``handle``."""

    return re.sub(r"^@", "", handle.strip())


def build_query(handle: str) -> str:
    clean = clean_handle(handle)
    return f"site:twitter.com @{clean} OR from:{clean}"


def _bio_candidates(text: str) -> Iterable[str]:
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if len(line) <= 10 or line.startswith("@"):
            continue
        if any(word in line for word in _BIO_STOPWORDS):
            continue
        yield line


def _absorb_chunk(info: ProfileInfo, chunk: SearchChunk) -> None:
    text = chunk.text.strip()
    if text:
        info.tweets.append(text)

    extra = chunk.extra_info
    if extra is not None:
        if info.profile_image_url is None and extra.image_url:
            info.profile_image_url = extra.image_url
        if info.name is None and extra.title:
            match = _NAME_PATTERN.match(extra.title)
            if match and match.group(1).strip():
                info.name = match.group(1).strip()

    # Individual posts never carry the profile bio.
    if info.bio is None and "/status/" not in chunk.url:
        info.bio = next(iter(_bio_candidates(chunk.text)), None)


def extract_profile_info(result: SearchResult) -> ProfileInfo:
    """Fold the search chunks into a :class:`ProfileInfo`.

    Every chunk with text contributes a tweet. The image, name and bio
    fields keep the first value found in chunk order.
    """

    info = ProfileInfo()
    for chunk in result.chunks:
        _absorb_chunk(info, chunk)
    return info


class SearchClient:
    """Thin wrapper around the Exa keyword search endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: str = DEFAULT_SEARCH_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._http_client = http_client or httpx.Client(timeout=timeout)

    def _client(self) -> httpx.Client:
        return self._http_client

    def close(self) -> None:
        self._http_client.close()

    def search(self, handle: str) -> SearchResult:
        """Run the profile search for ``handle`` and return the raw chunks."""

        if not self.api_key:
            raise SearchFailure("Exa API key is required")

        payload: Dict[str, Any] = {
            "query": build_query(handle),
            "num_results": MAX_RESULTS,
            "use_autoprompt": True,
            "include_domains": list(SEARCH_DOMAINS),
            "highlights": True,
            "text_search_strategy": "keyword",
        }
        headers = {"Content-Type": "application/json", "X-API-Key": self.api_key}

        _LOGGER.debug("Searching profile content with query %r", payload["query"])
        try:
            response = self._client().post(self.base_url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise SearchFailure("Failed to search X profile") from exc

        if not isinstance(data, dict):
            raise SearchFailure("Search response was not a JSON object")
        try:
            result = SearchResult.from_payload(data)
        except ValueError as exc:
            raise SearchFailure("Search response had an unexpected shape") from exc
        _LOGGER.debug("Search returned %d chunks", len(result.chunks))
        return result

    def search_profile(self, handle: str) -> ProfileInfo:
        """Search for ``handle`` and extract whatever profile data is present."""

        return extract_profile_info(self.search(handle))


__all__ = [
    "SearchClient",
    "build_query",
    "clean_handle",
    "extract_profile_info",
]
