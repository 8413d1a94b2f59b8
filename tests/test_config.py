"""Tests for SDK configuration."""

import json

import pytest

from storefront_sdk.config import StorefrontConfig, configure, get_global_config, set_global_config
from storefront_sdk.exceptions import ConfigurationError


class TestStorefrontConfig:
    """Test configuration defaults, environment loading and validation."""

    def test_defaults(self):
        config = StorefrontConfig()

        assert config.api_key is None
        assert config.shop_endpoint == "https://shop.api.storefront.cloud"
        assert config.shop_api_version == "v1"
        assert config.telemetry_endpoint == "https://telemetry.api.storefront.cloud"
        assert config.telemetry_api_version == "v1beta2"
        assert config.timeout == 30.0
        assert config.max_retries == 2
        assert config.has_scope() is False

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_API_KEY", "env-key")
        monkeypatch.setenv("STOREFRONT_PARTNER", "acme")
        monkeypatch.setenv("STOREFRONT_LOCATION", "downtown")
        monkeypatch.setenv("STOREFRONT_TIMEOUT", "5")
        monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "debug")
        monkeypatch.setenv("STOREFRONT_LOG_REQUESTS", "true")
        monkeypatch.setenv("STOREFRONT_DEBUG", "1")

        config = StorefrontConfig()

        assert config.api_key == "env-key"
        assert config.partner == "acme"
        assert config.location == "downtown"
        assert config.timeout == 5.0
        assert config.log_level == "DEBUG"
        assert config.log_requests is True
        assert config.debug is True
        assert config.has_scope() is True

    def test_explicit_values_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_PARTNER", "env-partner")
        assert StorefrontConfig(partner="acme").partner == "acme"

    def test_invalid_timeout_in_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            StorefrontConfig()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timeout": 0},
            {"max_retries": -1},
            {"log_level": "CHATTY"},
            {"shop_endpoint": ""},
            {"telemetry_endpoint": ""},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ConfigurationError):
            StorefrontConfig(**kwargs)

    @pytest.mark.parametrize(
        "partner, location, expected",
        [("acme", "downtown", True), ("a", "downtown", False), ("acme", "", False), (None, None, False)],
    )
    def test_has_scope(self, partner, location, expected):
        assert StorefrontConfig(partner=partner, location=location).has_scope() is expected

    def test_to_dict_masks_api_key(self):
        data = StorefrontConfig(api_key="secret", partner="acme").to_dict()
        assert data["api_key"] == "***"
        assert data["partner"] == "acme"

    def test_update(self):
        config = StorefrontConfig()
        config.update(partner="acme", location="downtown")
        assert config.has_scope() is True

        with pytest.raises(ConfigurationError):
            config.update(colour="blue")
        with pytest.raises(ConfigurationError):
            config.update(timeout=-1)


class TestConfigFiles:
    """Test loading configuration from disk."""

    def test_json(self, tmp_path):
        path = tmp_path / "storefront.json"
        path.write_text(json.dumps({"api_key": "file-key", "partner": "acme", "location": "downtown"}))

        config = StorefrontConfig.from_file(str(path))

        assert config.api_key == "file-key"
        assert config.has_scope() is True

    def test_yaml(self, tmp_path):
        path = tmp_path / "storefront.yaml"
        path.write_text("partner: acme\nlocation: downtown\ntimeout: 10\n")

        config = StorefrontConfig.from_file(str(path))

        assert config.partner == "acme"
        assert config.timeout == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            StorefrontConfig.from_file(str(tmp_path / "absent.json"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "storefront.toml"
        path.write_text("partner = 'acme'\n")
        with pytest.raises(ConfigurationError):
            StorefrontConfig.from_file(str(path))

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "storefront.json"
        path.write_text(json.dumps({"colour": "blue"}))
        with pytest.raises(ConfigurationError):
            StorefrontConfig.from_file(str(path))


def test_global_config():
    config = get_global_config()
    assert get_global_config() is config

    configure(partner="acme")
    assert get_global_config().partner == "acme"

    replacement = StorefrontConfig(partner="other")
    set_global_config(replacement)
    assert get_global_config() is replacement
