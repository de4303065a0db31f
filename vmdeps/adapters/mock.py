"""
Mock fetcher — test double for the network.

Serves canned payloads per URL and records every request, so tests
can assert both what was installed and that no download happened.
"""

from __future__ import annotations

from vmdeps.adapters.base import Fetcher
from vmdeps.core.errors import FetchFailed


class MockFetcher(Fetcher):
    """Fetcher returning configured payloads; unknown URLs fail."""

    def __init__(self, fetcher_name: str = "mock"):
        self._name = fetcher_name
        self._payloads: dict[str, bytes] = {}
        self._failures: dict[str, str] = {}
        self._call_log: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[str]:
        """URLs requested, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_payload(self, url: str, payload: bytes) -> None:
        """Serve ``payload`` for ``url``."""
        self._payloads[url] = payload
        self._failures.pop(url, None)

    def set_failure(self, url: str, reason: str = "Mock failure") -> None:
        """Make requests for ``url`` raise ``FetchFailed``."""
        self._failures[url] = reason
        self._payloads.pop(url, None)

    def fetch(self, url: str) -> bytes:
        self._call_log.append(url)
        if url in self._failures:
            raise FetchFailed(url, self._failures[url])
        if url not in self._payloads:
            raise FetchFailed(url, "no payload configured")
        return self._payloads[url]

    def reset(self) -> None:
        """Clear call log, payloads and failures."""
        self._call_log.clear()
        self._payloads.clear()
        self._failures.clear()
