"""LLM and maps backed agents that turn profiles into recommendations."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([.,;:!?])")


def optimize_prompt(prompt: str) -> str:
    """Collapse whitespace so templated prompts cost fewer tokens."""

    collapsed = _WHITESPACE.sub(" ", prompt.strip())
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", collapsed)


from .persona import PersonaGenerator
from .recommender import LocationRecommender, default_queries

__all__ = [
    "LocationRecommender",
    "PersonaGenerator",
    "default_queries",
    "optimize_prompt",
]
