"""
Credential helper provisioning — settings → dependency group.

The helper catalog is fixed at import time and never mutated. A
requested helper becomes a ``BinaryDependency`` only when its name is
in the catalog; other names are skipped with a warning (or rejected
in strict mode).
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from vmdeps.core.config.loader import cred_helpers_dir
from vmdeps.core.errors import UnknownHelper, UnsupportedArchitecture
from vmdeps.core.models.dependency import (
    BinaryDependency,
    Dependency,
    DependencyGroup,
    NoneDependency,
)
from vmdeps.core.models.settings import Settings

logger = logging.getLogger(__name__)

DESCRIPTION = "Installing Credential Helper"
ERROR_MESSAGE = "Failed to finish installing credential helper"

SUPPORTED_ARCHES = ("arm64", "amd64")

# platform.machine() → release architecture name
_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True)
class HelperSpec:
    """A downloadable credential helper.

    ``url_template`` takes ``{version}`` and ``{arch}``; ``hashes``
    maps each supported architecture to its ``algo:hex`` digest.
    """

    name: str
    binary_name: str
    version: str
    url_template: str
    hashes: MappingProxyType

    def url_for(self, arch: str) -> str:
        return self.url_template.format(version=self.version, arch=arch)

    def hash_for(self, arch: str) -> str:
        try:
            return self.hashes[arch]
        except KeyError:
            raise UnsupportedArchitecture(arch, sorted(self.hashes)) from None


ECR_LOGIN = HelperSpec(
    name="ecr-login",
    binary_name="docker-credential-ecr-login",
    version="0.8.0",
    url_template=(
        "https://amazon-ecr-credential-helper-releases.s3.us-east-2.amazonaws.com"
        "/{version}/linux-{arch}/docker-credential-ecr-login"
    ),
    hashes=MappingProxyType({
        "arm64": "sha256:d62badea3153688ec5c24f440df9fb84ff4b02c624dff9288967267e7445daa1",
        "amd64": "sha256:dcc7ae9915b5d8fa2d9e2b18fc30bab5bfbbce5b82401c7644e6ab97973ac35c",
    }),
)

HELPER_CATALOG: MappingProxyType = MappingProxyType({
    ECR_LOGIN.name: ECR_LOGIN,
})


def host_architecture(machine: str | None = None) -> str:
    """Release architecture for this host (or for ``machine``).

    Raises:
        UnsupportedArchitecture: For machines with no published helpers.
    """
    raw = (machine if machine is not None else platform.machine()).lower()
    arch = _ARCH_MAP.get(raw)
    if arch is None:
        raise UnsupportedArchitecture(raw, list(SUPPORTED_ARCHES))
    return arch


def check_architecture(arch: str) -> str:
    """Return ``arch`` if supported, else raise ``UnsupportedArchitecture``."""
    if arch not in SUPPORTED_ARCHES:
        raise UnsupportedArchitecture(arch, list(SUPPORTED_ARCHES))
    return arch


def resolve(
    requested: Iterable[str] | None,
    arch: str,
    install_dir: Path,
    owner_dir: Path,
    *,
    strict: bool = False,
) -> list[Dependency]:
    """Turn requested helper names into dependencies, in request order.

    Nothing requested yields ``[NoneDependency()]``. Repeated names
    resolve once.

    Raises:
        UnsupportedArchitecture: ``arch`` is not a supported architecture.
        UnknownHelper: A name is not in the catalog and ``strict`` is set.
    """
    check_architecture(arch)
    names = list(requested or [])
    if not names:
        return [NoneDependency()]

    deps: list[Dependency] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)

        spec = HELPER_CATALOG.get(name)
        if spec is None:
            if strict:
                raise UnknownHelper(name, sorted(HELPER_CATALOG))
            logger.warning("Skipping unknown credential helper '%s'", name)
            continue

        deps.append(
            BinaryDependency(
                binary_name=spec.binary_name,
                source_url=spec.url_for(arch),
                expected_hash=spec.hash_for(arch),
                install_dir=install_dir,
                owner_dir=owner_dir,
            )
        )
    return deps


def new_dependency_group(
    settings: Settings | None,
    home: Path,
    arch: str,
    *,
    strict: bool = False,
) -> DependencyGroup:
    """Build the credential helper group for ``settings``.

    ``settings`` may be None (no settings document at all), which is
    treated like an empty helper list.
    """
    requested = settings.creds_helpers if settings is not None else None
    members = resolve(
        requested,
        arch,
        install_dir=cred_helpers_dir(home),
        owner_dir=home,
        strict=strict,
    )
    return DependencyGroup(
        description=DESCRIPTION,
        error_message=ERROR_MESSAGE,
        members=tuple(members),
    )
