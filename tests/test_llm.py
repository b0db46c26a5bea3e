from __future__ import annotations

import json
from typing import Any, Dict

import httpx
import pytest

from beaver.core.llm import LLMClient
from beaver.errors import UpstreamFailure


def _completion(content: Any) -> Dict[str, Any]:
    return {"choices": [{"message": {"content": content}}]}


def test_chat_json_requests_json_object() -> None:
    seen: Dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion(json.dumps({"foo": "bar"})))

    client = LLMClient(
        api_key="sk-test",
        base_url="https://llm.test/v1/",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    result = client.chat_json(prompt="Give me data", system="You are helpful", prompt_version="v1")

    assert result == {"foo": "bar"}
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["response_format"] == {"type": "json_object"}
    assert seen["body"]["temperature"] == 0.7
    assert seen["body"]["model"] == "gpt-4"
    assert seen["body"]["user"] == "v1"
    assert "max_tokens" not in seen["body"]
    assert [message["role"] for message in seen["body"]["messages"]] == ["system", "user"]


def test_chat_requires_api_key() -> None:
    client = LLMClient(api_key=None)

    with pytest.raises(UpstreamFailure):
        client.chat(prompt="hi", system="sys", prompt_version="v1")


@pytest.mark.parametrize(
    "response",
    [
        {},
        {"choices": []},
        _completion(None),
        _completion(""),
    ],
)
def test_extract_content_rejects_empty_responses(response: Dict[str, Any]) -> None:
    with pytest.raises(ValueError):
        LLMClient.extract_content(response)


def test_chat_json_rejects_non_object_content() -> None:
    client = LLMClient(
        api_key="sk-test",
        http_client=httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=_completion("[1, 2]")))
        ),
    )

    with pytest.raises(ValueError):
        client.chat_json(prompt="p", system="s", prompt_version="v1")
