"""Tests for the StarLine data models."""

import pytest

from starline.const import CONF_APP_ID, CONF_LOGIN, CONF_PASSWORD, CONF_SECRET
from starline.models import Config, StarlineDevice


class TestConfig:
    """Tests for Config dataclass."""

    def test_config_defaults_to_empty_strings(self) -> None:
        """Test that a new Config has empty credentials."""
        config = Config()
        assert config.login == ""
        assert config.password == ""
        assert config.app_id == ""
        assert config.secret == ""

    def test_config_setters_are_fluent(self) -> None:
        """Test that setters update the field and return the same config."""
        config = Config()
        result = (
            config.set_login("login")
            .set_password("password")
            .set_app_id("app id")
            .set_secret("secret key")
        )
        assert result is config
        assert config == Config(
            login="login",
            password="password",
            app_id="app id",
            secret="secret key",
        )

    def test_config_from_mapping_reads_conf_keys(self) -> None:
        """Test that from_mapping reads the CONF_* keys."""
        config = Config.from_mapping(
            {
                CONF_LOGIN: "login",
                CONF_PASSWORD: "password",
                CONF_APP_ID: "app id",
                CONF_SECRET: "secret key",
            }
        )
        assert config.login == "login"
        assert config.secret == "secret key"

    def test_config_from_mapping_defaults_missing_keys(self) -> None:
        """Test that missing keys fall back to empty strings."""
        config = Config.from_mapping({CONF_LOGIN: "login"})
        assert config.login == "login"
        assert config.password == ""


class TestStarlineDevice:
    """Tests for StarlineDevice dataclass."""

    def test_starline_device_can_be_created(self) -> None:
        """Test that StarlineDevice can be created with id and name."""
        device = StarlineDevice(id="861311", name="Car")
        assert device.id == "861311"
        assert device.name == "Car"

    def test_starline_device_is_frozen(self) -> None:
        """Test that StarlineDevice is frozen and cannot be modified."""
        device = StarlineDevice(id="861311", name="Car")
        with pytest.raises((AttributeError, TypeError)):
            device.id = "861312"
