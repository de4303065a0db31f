"""
Credential store refresh — keep config.json in line with settings.yaml.

When ``ecr-login`` is not among the configured helpers, a leftover
``credsStore`` entry in config.json would point the container client
at a helper that is no longer provisioned. The refresh clears it.

Only ``credsStore`` and ``auths`` are touched; every other key in the
document is written back as it was read. Running the refresh twice
gives the same file as running it once.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from vmdeps.core.config.loader import load_settings
from vmdeps.core.errors import CredentialStoreParseError

logger = logging.getLogger(__name__)

ECR_HELPER = "ecr-login"

CREDS_STORE_KEY = "credsStore"
AUTHS_KEY = "auths"

CREDENTIAL_STORE_MODE = 0o600


def refresh_config_file(settings_path: Path, config_json_path: Path) -> bool:
    """Clear a stale ``credsStore`` from config.json.

    Returns:
        True if the file was rewritten, False if nothing needed doing.

    Raises:
        SettingsParseError: settings.yaml is invalid.
        CredentialStoreParseError: config.json is not UTF-8 JSON, not an
            object, or has a mistyped ``credsStore`` / ``auths`` (the file
            is not modified).
        OSError: config.json cannot be read or written.
    """
    settings = load_settings(settings_path)
    if ECR_HELPER in settings.creds_helpers:
        logger.debug("%s is configured — leaving %s alone", ECR_HELPER, config_json_path)
        return False

    if not config_json_path.exists():
        logger.debug("No credential store at %s — nothing to refresh", config_json_path)
        return False

    document = _load_credential_store(config_json_path)

    if not document.get(CREDS_STORE_KEY):
        return False

    logger.info(
        "Clearing credsStore=%r from %s", document[CREDS_STORE_KEY], config_json_path
    )
    del document[CREDS_STORE_KEY]
    if document.get(AUTHS_KEY) is None:
        document[AUTHS_KEY] = {}

    payload = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    _overwrite(config_json_path, payload)
    return True


def _load_credential_store(path: Path) -> dict:
    """Parse config.json, rejecting anything the refresh would have to guess at."""
    raw = path.read_bytes()

    try:
        document = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CredentialStoreParseError(path, f"not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise CredentialStoreParseError(path, str(e)) from e

    if not isinstance(document, dict):
        raise CredentialStoreParseError(
            path, f"expected a JSON object, got {type(document).__name__}"
        )

    creds_store = document.get(CREDS_STORE_KEY)
    if creds_store is not None and not isinstance(creds_store, str):
        raise CredentialStoreParseError(
            path, f"{CREDS_STORE_KEY} must be a string, got {type(creds_store).__name__}"
        )
    auths = document.get(AUTHS_KEY)
    if auths is not None and not isinstance(auths, dict):
        raise CredentialStoreParseError(
            path, f"{AUTHS_KEY} must be an object, got {type(auths).__name__}"
        )
    return document


def _overwrite(path: Path, content: str) -> None:
    """Truncate ``path`` and write ``content`` in place."""
    fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, CREDENTIAL_STORE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
