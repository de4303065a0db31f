"""
Binary installer — fetch, verify and place a single binary.

    install(dep)
      ├─ target present and digest matches  →  done, no download
      ├─ fetch bytes                        →  FetchFailed
      ├─ digest mismatch                    →  VerificationFailed (nothing written)
      └─ temp file + chmod + rename         →  WriteFailed

The target path only ever holds a complete, verified binary.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from vmdeps.adapters.base import Fetcher
from vmdeps.core.errors import VerificationFailed, WriteFailed
from vmdeps.core.models.dependency import BinaryDependency, split_digest
from vmdeps.core.persistence.atomic import atomic_write_bytes

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755
DIRECTORY_MODE = 0o755

_CHUNK = 65536


def digest_bytes(payload: bytes, algo: str) -> str:
    """Return ``algo:hex`` for ``payload``."""
    h = hashlib.new(algo)
    h.update(payload)
    return f"{algo}:{h.hexdigest()}"


def digest_file(path: Path, algo: str) -> str:
    """Return ``algo:hex`` for the file at ``path``, read in chunks."""
    h = hashlib.new(algo)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return f"{algo}:{h.hexdigest()}"


class BinaryInstaller:
    """Installs ``BinaryDependency`` values using a ``Fetcher``."""

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    def verify(self, dep: BinaryDependency) -> bool:
        """True when the target exists and its digest equals ``expected_hash``."""
        target = dep.target_path
        if not target.is_file():
            return False
        algo = dep.hash_algorithm
        try:
            actual = digest_file(target, algo)
        except OSError as e:
            logger.warning("Cannot read %s for verification: %s", target, e)
            return False
        return actual == _normalized(dep.expected_hash)

    def install(self, dep: BinaryDependency) -> None:
        """Make ``dep.target_path`` hold the verified binary.

        Raises:
            FetchFailed: Download failed.
            VerificationFailed: Downloaded content has the wrong digest.
            WriteFailed: Directory creation or file placement failed.
        """
        target = dep.target_path

        if target.exists():
            if self.verify(dep):
                logger.info("%s already installed at %s", dep.binary_name, target)
                return
            logger.warning(
                "%s exists but does not match %s — reinstalling",
                target,
                dep.expected_hash,
            )

        try:
            dep.install_dir.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise WriteFailed(dep.install_dir, str(e)) from e

        payload = self.fetcher.fetch(dep.source_url)

        algo = dep.hash_algorithm
        actual = digest_bytes(payload, algo)
        expected = _normalized(dep.expected_hash)
        if actual != expected:
            raise VerificationFailed(dep.binary_name, expected, actual)

        try:
            atomic_write_bytes(target, payload, mode=EXECUTABLE_MODE)
        except OSError as e:
            raise WriteFailed(target, str(e)) from e

        logger.info("Installed %s (%s)", target, expected)


def _normalized(digest: str) -> str:
    algo, hexdigest = split_digest(digest)
    return f"{algo}:{hexdigest}"
