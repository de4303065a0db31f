"""
VM settings — update cpus/memory in settings.yaml.

Only the settings file is changed. The running VM picks the new
values up on its next restart; applying them live is the VM
manager's job.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from vmdeps.core.config.loader import read_settings_document
from vmdeps.core.errors import ConfigError
from vmdeps.core.models.settings import Settings
from vmdeps.core.persistence.atomic import atomic_write_text

logger = logging.getLogger(__name__)

SETTINGS_FILE_MODE = 0o644


def apply_vm_settings(path: Path, cpus: int = 0, memory: str = "") -> bool:
    """Write ``cpus`` / ``memory`` into the settings file.

    ``cpus == 0`` and ``memory == ""`` mean "not given" and leave the
    current value in place.

    Returns:
        True if the file changed, False if the values were already set.

    Raises:
        ConfigError: Negative cpus or an invalid memory size.
        SettingsParseError: The existing settings file is invalid.
    """
    if cpus < 0:
        raise ConfigError(f"cpus must be a positive number, got {cpus}")

    document = read_settings_document(path)
    updated = dict(document)
    if cpus:
        updated["cpus"] = cpus
    if memory:
        updated["memory"] = memory

    try:
        Settings.model_validate(updated)
    except ValidationError as e:
        raise ConfigError(f"Invalid VM settings: {e}") from e

    if updated == document:
        logger.info("VM settings unchanged (cpus=%s, memory=%s)", cpus, memory)
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.safe_dump(updated, default_flow_style=False, sort_keys=False)
    atomic_write_text(path, content, mode=SETTINGS_FILE_MODE)
    logger.info("Updated %s: cpus=%s memory=%s", path, updated.get("cpus"), updated.get("memory"))
    return True
