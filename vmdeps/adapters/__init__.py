"""Adapters — bindings to the outside world (network).

Public re-exports for convenient access.
"""

from vmdeps.adapters.base import Fetcher
from vmdeps.adapters.net.fetch import UrllibFetcher
from vmdeps.adapters.mock import MockFetcher

__all__ = [
    "Fetcher",
    "MockFetcher",
    "UrllibFetcher",
]
