"""Vendor API clients for Beaver."""

from .google_api import GoogleMapsClient
from .llm import LLMClient
from .search import SearchClient, clean_handle, extract_profile_info

__all__ = [
    "GoogleMapsClient",
    "LLMClient",
    "SearchClient",
    "clean_handle",
    "extract_profile_info",
]
