"""GitHub profile lookup."""

from .fetcher import GhCliFetcher, HttpFetcher, ProfileFetcher, create_fetcher
from .models import ProfileRecord

__all__ = [
    "GhCliFetcher",
    "HttpFetcher",
    "ProfileFetcher",
    "ProfileRecord",
    "create_fetcher",
]
