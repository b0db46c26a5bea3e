"""Process-wide configuration loaded from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Credentials and tunables shared by every client in the process."""

    exa_api_key: Optional[str] = None
    exa_base_url: str = "https://api.exa.ai/search"
    search_timeout: float = 5.0
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4"
    llm_temperature: float = 0.7
    llm_timeout: float = 60.0
    google_maps_api_key: Optional[str] = None
    google_maps_timeout: float = 10.0
    google_maps_search_radius: int = 10000
    max_locations: int = 10
    api_url: str = "http://localhost:8000"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (``os.environ`` after loading ``.env``)."""

        if env is None:
            load_dotenv()
            env = os.environ

        return cls(
            exa_api_key=env.get("EXA_API_KEY") or None,
            exa_base_url=env.get("EXA_BASE_URL") or cls.exa_base_url,
            search_timeout=_float_env(env, "SEARCH_TIMEOUT", cls.search_timeout),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_base_url=env.get("OPENAI_BASE_URL") or cls.openai_base_url,
            openai_model=env.get("OPENAI_MODEL") or cls.openai_model,
            llm_temperature=_float_env(env, "LLM_TEMPERATURE", cls.llm_temperature),
            llm_timeout=_float_env(env, "LLM_TIMEOUT", cls.llm_timeout),
            google_maps_api_key=env.get("GOOGLE_MAPS_API_KEY") or None,
            google_maps_timeout=_float_env(env, "GOOGLE_MAPS_TIMEOUT", cls.google_maps_timeout),
            google_maps_search_radius=_int_env(
                env, "GOOGLE_MAPS_SEARCH_RADIUS", cls.google_maps_search_radius
            ),
            max_locations=_int_env(env, "MAX_LOCATIONS", cls.max_locations),
            api_url=env.get("BEAVER_API_URL") or cls.api_url,
            log_level=(env.get("LOG_LEVEL") or cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install the default log format once for the whole process."""

    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=_LOG_FORMAT)


__all__ = ["Settings", "configure_logging"]
