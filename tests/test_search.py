from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from beaver.core.search import SearchClient, build_query, clean_handle, extract_profile_info
from beaver.errors import SearchFailure
from beaver.schemas import SearchResult


def _result(chunks: List[Dict[str, Any]]) -> SearchResult:
    return SearchResult.from_payload({"chunks": chunks, "extra_info": {"total_chunk_count": len(chunks)}})


def test_clean_handle_strips_single_leading_at() -> None:
    assert clean_handle("@jdoe") == "jdoe"
    assert clean_handle("jdoe") == "jdoe"
    assert clean_handle("@@jdoe") == "@jdoe"


def test_build_query_embeds_site_and_author_filters() -> None:
    query = build_query("@jdoe")

    assert query == "site:twitter.com @jdoe OR from:jdoe"
    assert "from:jdoe" in query


def test_bio_skips_counter_lines_and_keeps_first_match() -> None:
    info = extract_profile_info(
        _result(
            [
                {"text": "Followers: 200", "url": "https://x.com/jdoe"},
                {"text": "Loves hiking and open source.", "url": "https://x.com/jdoe"},
                {"text": "Another plausible bio line", "url": "https://x.com/jdoe/about"},
            ]
        )
    )

    assert info.bio == "Loves hiking and open source."
    assert info.tweets == [
        "Followers: 200",
        "Loves hiking and open source.",
        "Another plausible bio line",
    ]


def test_bio_ignores_status_pages_short_lines_and_mentions() -> None:
    info = extract_profile_info(
        _result(
            [
                {"text": "A long post from a status page", "url": "https://x.com/jdoe/status/1"},
                {"text": "short\n@jdoe replies here a lot\n  Building maps for fun  ", "url": "https://x.com/jdoe"},
            ]
        )
    )

    assert info.bio == "Building maps for fun"


def test_first_image_and_name_win() -> None:
    info = extract_profile_info(
        _result(
            [
                {"text": "", "url": "https://x.com/jdoe", "extra_info": {"title": "(no name)"}},
                {
                    "text": "hello",
                    "url": "https://x.com/jdoe/status/1",
                    "extra_info": {"image_url": "https://img/1.png", "title": "Jane Doe (@jdoe) / X"},
                },
                {
                    "text": "hello",
                    "url": "https://x.com/jdoe/status/2",
                    "extra_info": {"image_url": "https://img/2.png", "title": "Someone Else (@x)"},
                },
            ]
        )
    )

    assert info.profile_image_url == "https://img/1.png"
    assert info.name == "Jane Doe"
    # duplicates are kept, blank text is not
    assert info.tweets == ["hello", "hello"]


def test_no_text_means_no_tweets() -> None:
    info = extract_profile_info(_result([{"text": "   ", "url": "https://x.com/jdoe"}]))

    assert info.tweets == []
    assert info.bio is None


def _client_with(handler) -> SearchClient:
    return SearchClient(
        "exa-key",
        base_url="https://search.test/search",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_search_profile_sends_expected_request() -> None:
    seen: Dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["key"] = request.headers.get("X-API-Key")
        return httpx.Response(
            200,
            json={"chunks": [{"text": "Post one", "url": "https://x.com/jdoe/status/9"}]},
        )

    info = _client_with(handler).search_profile("@jdoe")

    assert info.tweets == ["Post one"]
    assert seen["key"] == "exa-key"
    assert seen["body"]["query"] == "site:twitter.com @jdoe OR from:jdoe"
    assert seen["body"]["num_results"] == 10
    assert seen["body"]["include_domains"] == ["twitter.com", "x.com"]
    assert seen["body"]["highlights"] is True


def test_search_without_key_fails_before_any_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        pytest.fail("search API should not be called")

    client = SearchClient(None, http_client=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(SearchFailure):
        client.search_profile("jdoe")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
def test_search_failures_are_wrapped(response: httpx.Response) -> None:
    client = _client_with(lambda request: response)

    with pytest.raises(SearchFailure):
        client.search("jdoe")


def test_default_client_keeps_a_finite_timeout() -> None:
    client = SearchClient("exa-key")

    assert client._client().timeout.read == 5.0
    client.close()
