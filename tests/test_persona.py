from __future__ import annotations

from typing import Any, Dict, List

import pytest

from beaver.agents import PersonaGenerator, optimize_prompt
from beaver.errors import GenerationFailure, UpstreamFailure


class DummyLLM:
    def __init__(self, reply: Any):
        self.reply = reply
        self.calls: List[Dict[str, str]] = []

    def chat_json(self, *, prompt, system, prompt_version):
        self.calls.append({"prompt": prompt, "system": system, "prompt_version": prompt_version})
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


_VALID_REPLY = {
    "name": "Jane Doe",
    "handle": "jdoe",
    "bio": "Builds maps and climbs rocks.",
    "traits": ["curious", "direct", "playful", "patient", "outdoorsy"],
    "interests": ["hiking", "open source", "coffee", "cartography", "climbing"],
}


def test_generate_returns_persona_and_limits_posts() -> None:
    llm = DummyLLM(dict(_VALID_REPLY))
    tweets = [f"post {index}" for index in range(15)]

    persona = PersonaGenerator(llm).generate(tweets, "Loves hiking", handle="jdoe")

    assert persona.name == "Jane Doe"
    assert persona.traits[0] == "curious"
    prompt = llm.calls[0]["prompt"]
    assert "Bio: Loves hiking" in prompt
    assert "• post 9" in prompt
    assert "post 10" not in prompt
    assert llm.calls[0]["prompt_version"] == "persona.v1"
    assert "\n" not in llm.calls[0]["system"]


def test_user_prompt_omits_missing_bio() -> None:
    prompt = PersonaGenerator.build_user_prompt(["only post"])

    assert "Bio:" not in prompt
    assert "Display name:" not in prompt
    assert "Recent posts:\n• only post" in prompt


def test_display_name_is_included_when_known() -> None:
    llm = DummyLLM(dict(_VALID_REPLY))

    PersonaGenerator(llm).generate(["post"], handle="jdoe", display_name="Jane Doe")

    assert "Display name: Jane Doe" in llm.calls[0]["prompt"]


def test_missing_handle_and_bio_fall_back() -> None:
    reply = {key: value for key, value in _VALID_REPLY.items() if key not in {"handle", "bio"}}

    persona = PersonaGenerator(DummyLLM(reply)).generate(["post"], handle="jdoe")

    assert persona.handle == "jdoe"
    assert persona.bio == ""


@pytest.mark.parametrize("missing", ["name", "traits", "interests"])
def test_missing_required_field_fails(missing: str) -> None:
    reply = {key: value for key, value in _VALID_REPLY.items() if key != missing}

    with pytest.raises(GenerationFailure):
        PersonaGenerator(DummyLLM(reply)).generate(["post"])


def test_wrongly_typed_traits_fail() -> None:
    reply = dict(_VALID_REPLY, traits="curious, direct")

    with pytest.raises(GenerationFailure):
        PersonaGenerator(DummyLLM(reply)).generate(["post"])


@pytest.mark.parametrize(
    "error",
    [
        UpstreamFailure("OpenAI API key is required"),
        ValueError("LLM response did not contain content"),
    ],
)
def test_llm_errors_become_generation_failures(error: Exception) -> None:
    with pytest.raises(GenerationFailure) as excinfo:
        PersonaGenerator(DummyLLM(error)).generate(["post"])

    assert excinfo.value.__cause__ is error


def test_optimize_prompt_collapses_whitespace() -> None:
    assert optimize_prompt("  Hello   world .\n\n  Next ,line !  ") == "Hello world. Next,line!"
