"""
Tests for configuration loading — home layout and settings.yaml parsing.
"""

import textwrap
from pathlib import Path

import pytest

from vmdeps.core.config.loader import (
    credential_store_path,
    cred_helpers_dir,
    default_home,
    load_settings,
    read_settings_document,
    settings_path,
)
from vmdeps.core.errors import ConfigError, SettingsParseError


@pytest.fixture
def valid_settings_yaml(settings_file: Path) -> Path:
    settings_file.write_text(textwrap.dedent("""\
        cpus: 4
        memory: 8GiB
        creds_helpers:
          - ecr-login
        vmType: vz
    """))
    return settings_file


class TestHomeLayout:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VMDEPS_HOME", str(tmp_path / "custom"))
        assert default_home() == (tmp_path / "custom").resolve()

    def test_default_under_user_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("VMDEPS_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_home() == tmp_path / ".vmdeps"

    def test_file_names(self, home: Path):
        assert settings_path(home) == home / "settings.yaml"
        assert credential_store_path(home) == home / "config.json"
        assert cred_helpers_dir(home) == home / "cred-helpers"


class TestLoadSettings:
    def test_load_valid(self, valid_settings_yaml: Path):
        settings = load_settings(valid_settings_yaml)
        assert settings.cpus == 4
        assert settings.memory == "8GiB"
        assert settings.creds_helpers == ["ecr-login"]

    def test_missing_file_gives_defaults(self, settings_file: Path):
        settings = load_settings(settings_file)
        assert settings.creds_helpers == []
        assert settings.cpus is None

    def test_empty_file_gives_defaults(self, settings_file: Path):
        settings_file.write_text("")
        assert load_settings(settings_file).creds_helpers == []

    def test_helpers_absent(self, settings_file: Path):
        settings_file.write_text("cpus: 2\nmemory: 6GiB\n")
        assert load_settings(settings_file).creds_helpers == []

    def test_invalid_yaml(self, settings_file: Path):
        settings_file.write_text(":: invalid: yaml: [")
        with pytest.raises(SettingsParseError, match="Invalid YAML"):
            load_settings(settings_file)

    def test_non_mapping(self, settings_file: Path):
        settings_file.write_text("- just\n- a\n- list\n")
        with pytest.raises(SettingsParseError, match="Expected a YAML mapping"):
            load_settings(settings_file)

    def test_invalid_utf8(self, settings_file: Path):
        settings_file.write_bytes(b"creds_helpers:\n  - \xff\n")
        with pytest.raises(SettingsParseError, match="not valid UTF-8"):
            load_settings(settings_file)

    def test_bad_memory(self, settings_file: Path):
        settings_file.write_text("cpus: 2\nmemory: 6Gi\n")
        with pytest.raises(SettingsParseError, match="Invalid settings"):
            load_settings(settings_file)

    def test_bad_helper_list(self, settings_file: Path):
        settings_file.write_text("creds_helpers: ecr-login\n")
        with pytest.raises(SettingsParseError):
            load_settings(settings_file)

    def test_parse_error_is_config_error(self, settings_file: Path):
        settings_file.write_text("cpus: lots\n")
        with pytest.raises(ConfigError):
            load_settings(settings_file)


class TestReadSettingsDocument:
    def test_keeps_unknown_keys(self, valid_settings_yaml: Path):
        assert read_settings_document(valid_settings_yaml)["vmType"] == "vz"

    def test_missing(self, settings_file: Path):
        assert read_settings_document(settings_file) == {}
