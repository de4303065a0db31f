"""
Fetcher base — the contract between the installer and the network.

The installer never opens URLs itself; it asks a Fetcher for bytes.
Timeouts and transport details belong to the concrete fetcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Fetcher(ABC):
    """Abstract source of remote content.

    Implementations raise ``FetchFailed`` for every transport-level
    problem; they do not verify content.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Fetcher identifier, used in log lines."""

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """Return the full response body for ``url``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
