"""
HTTP fetcher — ``urllib.request`` download of release binaries.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

from vmdeps import __version__
from vmdeps.adapters.base import Fetcher
from vmdeps.core.errors import FetchFailed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


class UrllibFetcher(Fetcher):
    """Plain HTTPS GET with a per-request timeout.

    No retries: a failed request surfaces as ``FetchFailed`` and the
    caller decides what to do.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "urllib"

    def fetch(self, url: str) -> bytes:
        logger.info("Downloading %s", url)
        req = urllib.request.Request(
            url,
            headers={"User-Agent": f"vmdeps/{__version__}"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:  # noqa: S310
                payload = resp.read()
        except urllib.error.HTTPError as e:
            raise FetchFailed(url, f"HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise FetchFailed(url, str(e.reason)) from e
        except (OSError, ValueError) as e:
            raise FetchFailed(url, str(e)) from e

        logger.debug("Fetched %d bytes from %s", len(payload), url)
        return payload
