"""
Dependency group execution — install members in order, fail fast.

The first failing member stops the run and is reported wrapped in
``InstallationFailed`` together with the group's description and
error message. Members installed before the failure stay in place:
each one is complete and independently verifiable.
"""

from __future__ import annotations

import logging

from vmdeps.core.errors import InstallationFailed, VmdepsError
from vmdeps.core.models.dependency import BinaryDependency, DependencyGroup, NoneDependency
from vmdeps.core.services.binary_installer import BinaryInstaller

logger = logging.getLogger(__name__)


def install_group(group: DependencyGroup, installer: BinaryInstaller) -> None:
    """Install every member of ``group``.

    No-op groups (no members, or only ``NoneDependency``) return
    immediately without touching the installer.

    Raises:
        InstallationFailed: Wrapping the first member failure.
    """
    if group.is_noop:
        logger.debug("%s: nothing to install", group.description)
        return

    logger.info("%s (%d item(s))", group.description, len(group.binaries))

    for member in group.members:
        if isinstance(member, NoneDependency):
            continue
        if isinstance(member, BinaryDependency):
            try:
                installer.install(member)
            except VmdepsError as e:
                logger.error("%s: %s", group.error_message, e)
                raise InstallationFailed(group.description, group.error_message, e) from e
        else:
            raise TypeError(f"Unsupported dependency type: {type(member).__name__}")


def verify_group(group: DependencyGroup, installer: BinaryInstaller) -> list[BinaryDependency]:
    """Return the binary members that are missing or fail verification.

    An empty list means the group is fully satisfied.
    """
    return [dep for dep in group.binaries if not installer.verify(dep)]
