"""Agent that derives a persona from a user's public posts."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from beaver.agents import optimize_prompt
from beaver.core.llm import LLMClient
from beaver.errors import GenerationFailure, UpstreamFailure
from beaver.schemas import Persona

_LOGGER = logging.getLogger(__name__)

MAX_PROMPT_TWEETS = 10
REQUIRED_FIELDS = ("name", "traits", "interests")


class PersonaGenerator:
    """Turns scraped posts and a bio into a structured :class:`Persona`."""

    system_prompt = """
      You are an expert at understanding people based on their social media presence.
      Your task is to create a detailed persona based on someone's X (formerly Twitter) posts and bio.
      Analyze the content, style, interests, and values expressed in their posts to build this persona.

      Focus on identifying:
      1. Personality traits (e.g., analytical, creative, empathetic)
      2. Communication style (e.g., direct, humorous, formal)
      3. Values and beliefs (e.g., values authenticity, environmental consciousness)
      4. Interests and activities (e.g., technology, cooking, hiking)
      5. Lifestyle indicators (e.g., urban professional, outdoor enthusiast)

      Return a JSON object with the following structure:
      {
        "name": "Their name (if available, otherwise 'Unknown User')",
        "handle": "Their X handle (without the @ symbol)",
        "bio": "A concise 1-2 sentence description of who they are",
        "traits": ["trait1", "trait2", "trait3", "trait4", "trait5"],
        "interests": ["interest1", "interest2", "interest3", "interest4", "interest5"]
      }

      The traits should represent personality characteristics, communication style, and values.
      The interests should be specific topics, activities, or areas they seem interested in.
      Be specific and precise in your analysis. Base your assessment purely on the provided data.

      If there isn't enough information to determine specific traits or interests, make educated guesses
      based on the limited information available, but keep them reasonable and grounded.
    """
    prompt_version = "persona.v1"

    def __init__(self, llm: LLMClient) -> None:
        self.llm = llm

    @staticmethod
    def build_user_prompt(
        tweets: Sequence[str],
        bio: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> str:
        """Render the user message embedding at most ten posts."""

        tweet_list = "\n".join(f"• {tweet}" for tweet in list(tweets)[:MAX_PROMPT_TWEETS])
        bio_block = f"Bio: {bio}\n\n" if bio else ""
        name_block = f"Display name: {display_name}\n\n" if display_name else ""
        return (
            "Here's information from an X (Twitter) user's profile:\n\n"
            f"{bio_block}"
            f"{name_block}"
            "Recent posts:\n"
            f"{tweet_list}\n\n"
            "Based on this information, create a persona for this user following the format "
            "in your instructions.\n"
            "Focus especially on traits and interests that might influence what locations "
            "they would enjoy visiting."
        )

    @staticmethod
    def _validate(data: Dict[str, Any], handle: str) -> Persona:
        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise GenerationFailure(
                f"Failed to generate persona: Invalid response format (missing {', '.join(missing)})"
            )
        payload = {
            "name": data["name"],
            "handle": data.get("handle") or handle,
            "bio": data.get("bio") or "",
            "traits": data["traits"],
            "interests": data["interests"],
        }
        try:
            return Persona.model_validate(payload)
        except ValidationError as exc:
            raise GenerationFailure("Failed to generate persona: Invalid response format") from exc

    def generate(
        self,
        tweets: Sequence[str],
        bio: Optional[str] = None,
        *,
        handle: str = "",
        display_name: Optional[str] = None,
    ) -> Persona:
        """Return a :class:`Persona` built from ``tweets`` and ``bio``.

        Raises :class:`GenerationFailure` for a missing key, a failed call,
        empty or non-JSON content, or a reply lacking name/traits/interests.
        """

        system = optimize_prompt(self.system_prompt)
        prompt = self.build_user_prompt(tweets, bio, display_name)
        try:
            data = self.llm.chat_json(
                prompt=prompt,
                system=system,
                prompt_version=self.prompt_version,
            )
        except (UpstreamFailure, httpx.HTTPError, ValueError) as exc:
            raise GenerationFailure("Failed to generate persona") from exc

        persona = self._validate(data, handle)
        _LOGGER.debug("Generated persona for %r with %d traits", persona.handle, len(persona.traits))
        return persona


__all__ = ["PersonaGenerator"]
