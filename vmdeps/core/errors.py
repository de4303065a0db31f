"""
Error taxonomy — every failure the core surfaces to its caller.

Nothing here is retried internally. Each error names the dependency
or file it concerns so the CLI can print a single useful line.
"""

from __future__ import annotations

from pathlib import Path


class VmdepsError(Exception):
    """Base class for all vmdeps errors."""


# ── Installer ───────────────────────────────────────────────────


class FetchFailed(VmdepsError):
    """Raised when a binary cannot be downloaded (transport error)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class VerificationFailed(VmdepsError):
    """Raised when downloaded content does not match the expected digest."""

    def __init__(self, binary_name: str, expected: str, actual: str):
        super().__init__(
            f"Digest mismatch for {binary_name}: expected {expected}, got {actual}"
        )
        self.binary_name = binary_name
        self.expected = expected
        self.actual = actual


class WriteFailed(VmdepsError):
    """Raised when a verified binary cannot be placed on disk."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


# ── Provisioner ─────────────────────────────────────────────────


class UnknownHelper(VmdepsError):
    """Raised (in strict mode only) for a helper name missing from the catalog."""

    def __init__(self, name: str, known: list[str]):
        super().__init__(
            f"Unknown credential helper '{name}'. Known: {', '.join(known) or '(none)'}"
        )
        self.name = name


class UnsupportedArchitecture(VmdepsError):
    """Raised when no catalog entry exists for the requested architecture."""

    def __init__(self, arch: str, supported: list[str]):
        super().__init__(
            f"Unsupported architecture '{arch}'. Supported: {', '.join(supported)}"
        )
        self.arch = arch


# ── Configuration files ─────────────────────────────────────────


class ConfigError(VmdepsError):
    """Raised when the settings file is invalid or unusable."""


class SettingsParseError(ConfigError):
    """Raised when the settings document cannot be parsed or validated."""


class CredentialStoreParseError(VmdepsError):
    """Raised when config.json is not a valid JSON object. The file is left untouched."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid credential store {path}: {reason}")
        self.path = path


# ── Group ───────────────────────────────────────────────────────


class InstallationFailed(VmdepsError):
    """Aggregate failure of a dependency group, wrapping the first member error."""

    def __init__(self, description: str, error_message: str, cause: Exception):
        super().__init__(f"{error_message} ({description}): {cause}")
        self.description = description
        self.error_message = error_message
        self.cause = cause
