"""
Tests for config.json refresh — the settings.yaml / credsStore sync.
"""

import json
from pathlib import Path

import pytest

from vmdeps.core.errors import CredentialStoreParseError, SettingsParseError
from vmdeps.core.services.config_refresh import refresh_config_file

NO_HELPERS = "cpus: 2\nmemory: 6GiB\n"
ECR_HELPER = "cpus: 2\nmemory: 6GiB\ncreds_helpers:\n    - ecr-login\n"


class TestRefreshConfigFile:
    def test_ecr_login_configured_leaves_file(self, settings_file: Path, config_json: Path):
        settings_file.write_text(ECR_HELPER)
        config_json.write_text('{"credsStore":"ecr-login"}')

        assert refresh_config_file(settings_file, config_json) is False
        assert config_json.read_text() == '{"credsStore":"ecr-login"}'

    def test_missing_config_json(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)

        assert refresh_config_file(settings_file, config_json) is False
        assert not config_json.exists()

    def test_missing_settings_file(self, settings_file: Path, config_json: Path):
        config_json.write_text('{"credsStore":"ecr-login"}')

        assert refresh_config_file(settings_file, config_json) is True
        assert config_json.read_text() == '{"auths":{}}'

    def test_invalid_json_fails_and_keeps_file(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":}')

        with pytest.raises(CredentialStoreParseError):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_text() == '{"credsStore":}'

    def test_non_object_json_fails(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text("[]")

        with pytest.raises(CredentialStoreParseError, match="JSON object"):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_text() == "[]"

    def test_invalid_utf8_fails_and_keeps_file(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_bytes(b'{"credsStore":"\xff\xfe"}')

        with pytest.raises(CredentialStoreParseError, match="UTF-8"):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_bytes() == b'{"credsStore":"\xff\xfe"}'

    def test_non_string_creds_store_fails(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":123}')

        with pytest.raises(CredentialStoreParseError, match="credsStore must be a string"):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_text() == '{"credsStore":123}'

    def test_non_object_auths_fails(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":"x","auths":[]}')

        with pytest.raises(CredentialStoreParseError, match="auths must be an object"):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_text() == '{"credsStore":"x","auths":[]}'

    def test_no_creds_store_untouched(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text("{}")

        assert refresh_config_file(settings_file, config_json) is False
        assert config_json.read_text() == "{}"

    def test_clears_creds_store(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":"ecr-login"}')

        assert refresh_config_file(settings_file, config_json) is True
        assert config_json.read_text() == '{"auths":{}}'

    def test_preserves_other_fields(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        original = {
            "auths": {"registry.example.com": {"auth": "dXNlcjpwYXNz"}},
            "credsStore": "ecr-login",
            "credHelpers": {"public.ecr.aws": "ecr-login"},
            "proxies": {"default": {"httpProxy": "http://proxy:3128"}},
        }
        config_json.write_text(json.dumps(original))

        refresh_config_file(settings_file, config_json)

        result = json.loads(config_json.read_text())
        assert "credsStore" not in result
        assert result["auths"] == original["auths"]
        assert result["credHelpers"] == original["credHelpers"]
        assert result["proxies"] == original["proxies"]

    def test_null_auths_initialized(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":"desktop","auths":null}')

        refresh_config_file(settings_file, config_json)
        assert json.loads(config_json.read_text()) == {"auths": {}}

    def test_idempotent(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":"ecr-login","experimental":"enabled"}')

        refresh_config_file(settings_file, config_json)
        once = config_json.read_text()
        assert refresh_config_file(settings_file, config_json) is False
        assert config_json.read_text() == once

    def test_rewritten_file_is_private(self, settings_file: Path, config_json: Path):
        settings_file.write_text(NO_HELPERS)
        config_json.write_text('{"credsStore":"ecr-login"}')
        config_json.chmod(0o600)

        refresh_config_file(settings_file, config_json)
        assert config_json.stat().st_mode & 0o777 == 0o600

    def test_invalid_settings_is_fatal(self, settings_file: Path, config_json: Path):
        settings_file.write_text("cpus: 2\nmemory: 6Gi\n")
        config_json.write_text('{"credsStore":"ecr-login"}')

        with pytest.raises(SettingsParseError):
            refresh_config_file(settings_file, config_json)
        assert config_json.read_text() == '{"credsStore":"ecr-login"}'
