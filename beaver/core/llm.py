"""Centralised chat-completion client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence

import httpx

from beaver.errors import UpstreamFailure

DEFAULT_MODEL = "gpt-4"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0


_LOGGER = logging.getLogger(__name__)


def _clean_dict(payload: MutableMapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class LLMClient:
    """A small convenience wrapper for calling chat based LLM APIs."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    timeout: Optional[float] = DEFAULT_TIMEOUT
    max_tokens: Optional[int] = None
    base_url: str = "https://api.openai.com/v1"
    http_client: Optional[httpx.Client] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.http_client is None:
            self.http_client = httpx.Client(timeout=self.timeout)

    def _client(self) -> httpx.Client:
        return self.http_client

    def close(self) -> None:
        self.http_client.close()

    def chat(
        self,
        *,
        prompt: str,
        system: str,
        prompt_version: str,
        model: Optional[str] = None,
        stop: Optional[Sequence[str]] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        force_json: bool = False,
    ) -> Dict[str, Any]:
        """Call the backing LLM API and return its raw response."""

        if not self.api_key:
            raise UpstreamFailure("OpenAI API key is required")

        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]

        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.temperature,
            "max_tokens": max_tokens if max_tokens is not None else self.max_tokens,
            "stop": list(stop) if stop else None,
            "user": prompt_version,
            "response_format": {"type": "json_object"} if force_json else None,
        }

        payload = _clean_dict(payload)

        _LOGGER.debug(
            "Calling chat completion model %s [prompt_version=%s]",
            payload["model"],
            prompt_version,
        )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        response = self._client().post(
            f"{self.base_url.rstrip('/')}/chat/completions",
            json=payload,
            headers=headers,
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def extract_content(response: Mapping[str, Any]) -> str:
        """Extract the assistant message content from a chat completion response."""

        choices = response.get("choices")
        if not choices:
            raise ValueError("LLM response did not contain any choices")
        message = choices[0].get("message") or {}
        content = message.get("content")
        if not content:
            raise ValueError("LLM response did not contain content")
        return content

    def chat_json(self, *, prompt: str, system: str, prompt_version: str) -> Dict[str, Any]:
        """Request a JSON object reply and decode it."""

        response = self.chat(
            prompt=prompt,
            system=system,
            prompt_version=prompt_version,
            force_json=True,
        )
        data = json.loads(self.extract_content(response))
        if not isinstance(data, dict):
            raise ValueError("LLM response was not a JSON object")
        return data


__all__ = ["LLMClient"]
