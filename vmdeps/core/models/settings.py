"""
Settings model — the user-editable ``settings.yaml`` document.

Only three keys matter here:

    cpus            vCPUs for the virtual machine
    memory          memory size, binary units ("4GiB", "512MiB")
    creds_helpers   credential helpers to provision, in order

Any other keys are kept so rewriting the file does not drop them.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MEMORY_RE = re.compile(r"^(?P<value>\d+(\.\d+)?)\s?(?P<unit>KiB|MiB|GiB|TiB)$")

_UNIT_BYTES = {
    "KiB": 1024,
    "MiB": 1024**2,
    "GiB": 1024**3,
    "TiB": 1024**4,
}


def memory_to_bytes(memory: str) -> int:
    """Convert ``"6GiB"`` style sizes to a byte count.

    Raises:
        ValueError: If the size is not a binary-unit size.
    """
    match = MEMORY_RE.match(memory.strip())
    if not match:
        raise ValueError(
            f"memory must be a size with a binary unit such as '4GiB', got {memory!r}"
        )
    return int(float(match.group("value")) * _UNIT_BYTES[match.group("unit")])


class Settings(BaseModel):
    """Parsed settings document."""

    model_config = ConfigDict(extra="allow")

    cpus: int | None = Field(default=None, ge=1)
    memory: str | None = None
    creds_helpers: list[str] = Field(default_factory=list)

    @field_validator("memory")
    @classmethod
    def _memory_size(cls, v: str | None) -> str | None:
        if v is None:
            return v
        memory_to_bytes(v)
        return v

    @field_validator("creds_helpers", mode="before")
    @classmethod
    def _null_helpers(cls, v: Any) -> Any:
        # "creds_helpers:" with no items parses as None
        return [] if v is None else v
