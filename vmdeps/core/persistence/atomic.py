"""
Atomic file replacement.

Content is written to a temp file in the target's directory and then
renamed over the target, so readers see either the old file or the
complete new one, never a partial write.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, data: bytes, *, mode: int = 0o644) -> None:
    """Replace ``path`` with ``data`` atomically and set its permission bits.

    The parent directory must already exist. On any failure the temp
    file is removed and the original exception propagates.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(data), path)


def atomic_write_text(path: Path, content: str, *, mode: int = 0o644) -> None:
    """Text variant of :func:`atomic_write_bytes` (UTF-8)."""
    atomic_write_bytes(path, content.encode("utf-8"), mode=mode)
