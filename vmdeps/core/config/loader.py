"""
Configuration loader — home directory layout and settings.yaml.

Reads YAML, validates it against the ``Settings`` Pydantic model and
returns a typed object. Everything that can go wrong while reading
the file surfaces as ``SettingsParseError``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from vmdeps.core.errors import SettingsParseError
from vmdeps.core.models.settings import Settings

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "VMDEPS_HOME"
DEFAULT_HOME_DIRNAME = ".vmdeps"

SETTINGS_FILE = "settings.yaml"
CREDENTIAL_STORE_FILE = "config.json"
CRED_HELPERS_DIR = "cred-helpers"


def default_home() -> Path:
    """``$VMDEPS_HOME`` if set, otherwise ``~/.vmdeps``."""
    env = os.environ.get(HOME_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path.home() / DEFAULT_HOME_DIRNAME


def settings_path(home: Path) -> Path:
    return home / SETTINGS_FILE


def credential_store_path(home: Path) -> Path:
    return home / CREDENTIAL_STORE_FILE


def cred_helpers_dir(home: Path) -> Path:
    """Where credential helper binaries are installed."""
    return home / CRED_HELPERS_DIR


def read_settings_document(path: Path) -> dict:
    """Read the raw YAML mapping at ``path``.

    A missing or empty file is an empty mapping.

    Raises:
        SettingsParseError: Unreadable file, invalid YAML, or a
            top-level value that is not a mapping.
    """
    if not path.exists():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsParseError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SettingsParseError(f"{path} is not valid UTF-8: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise SettingsParseError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsParseError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )
    return data


def load_settings(path: Path) -> Settings:
    """Load and validate the settings document.

    A missing file yields default settings (no helpers requested).

    Raises:
        SettingsParseError: If the file exists but is invalid.
    """
    if not path.exists():
        logger.info("No settings file at %s — using defaults", path)
        return Settings()

    logger.debug("Loading settings from %s", path)
    data = read_settings_document(path)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsParseError(f"Invalid settings in {path}: {e}") from e

    logger.debug(
        "Loaded settings: cpus=%s memory=%s creds_helpers=%s",
        settings.cpus,
        settings.memory,
        settings.creds_helpers,
    )
    return settings
