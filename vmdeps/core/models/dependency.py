"""
Dependency models — the unit of installable work and its grouping.

``Dependency`` is a closed union of two variants, discriminated by
``kind``:

    BinaryDependency   fetch a binary, verify its digest, place it
    NoneDependency     explicit "nothing to do" sentinel

A ``DependencyGroup`` is an ordered, named collection of them. The
models are frozen: two groups built from the same inputs are equal.
Installation itself lives in ``vmdeps.core.services``.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX_RE = re.compile(r"^[0-9a-f]+$")


def split_digest(value: str) -> tuple[str, str]:
    """Split ``algo:hex`` into its parts, validating both.

    Raises:
        ValueError: If the string is not a well-formed digest.
    """
    if ":" not in value:
        raise ValueError(f"digest must look like 'sha256:<hex>', got {value!r}")
    algo, hexdigest = value.split(":", 1)
    algo = algo.lower()
    if algo not in hashlib.algorithms_available:
        raise ValueError(f"unsupported digest algorithm {algo!r}")
    if not hexdigest or not _HEX_RE.match(hexdigest):
        raise ValueError(f"digest value must be lowercase hex, got {hexdigest!r}")
    expected_len = hashlib.new(algo).digest_size * 2
    if len(hexdigest) != expected_len:
        raise ValueError(
            f"{algo} digest must be {expected_len} hex characters, got {len(hexdigest)}"
        )
    return algo, hexdigest


class BinaryDependency(BaseModel):
    """Download ``source_url`` into ``install_dir/binary_name``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    binary_name: str = Field(min_length=1)
    source_url: str = Field(min_length=1)
    expected_hash: str                  # "<algo>:<hex>"
    install_dir: Path
    owner_dir: Path                     # the tool's home directory

    @field_validator("binary_name")
    @classmethod
    def _plain_name(cls, v: str) -> str:
        if "/" in v or v in (".", ".."):
            raise ValueError(f"binary_name must be a plain file name, got {v!r}")
        return v

    @field_validator("expected_hash")
    @classmethod
    def _well_formed_hash(cls, v: str) -> str:
        split_digest(v)
        return v

    @field_validator("install_dir", "owner_dir")
    @classmethod
    def _absolute(cls, v: Path) -> Path:
        if not v.is_absolute():
            raise ValueError(f"path must be absolute, got {str(v)!r}")
        return v

    @property
    def target_path(self) -> Path:
        """Where the installed binary lives."""
        return self.install_dir / self.binary_name

    @property
    def hash_algorithm(self) -> str:
        return split_digest(self.expected_hash)[0]


class NoneDependency(BaseModel):
    """Sentinel for "nothing to install". Carries no state."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


Dependency = Annotated[
    Union[BinaryDependency, NoneDependency],
    Field(discriminator="kind"),
]


class DependencyGroup(BaseModel):
    """An ordered set of dependencies installed as one user-visible step.

    Member order is install order. A group with no members and a group
    holding only ``NoneDependency`` are both no-ops.
    """

    model_config = ConfigDict(frozen=True)

    description: str                    # shown while the group runs
    error_message: str                  # prefixed to any failure
    members: tuple[Dependency, ...] = ()

    @property
    def is_noop(self) -> bool:
        """True when there is nothing to install."""
        return all(isinstance(m, NoneDependency) for m in self.members)

    @property
    def binaries(self) -> list[BinaryDependency]:
        """The members that do real work, in install order."""
        return [m for m in self.members if isinstance(m, BinaryDependency)]
