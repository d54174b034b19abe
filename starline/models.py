"""Data models for the StarLine API client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .const import CONF_APP_ID, CONF_LOGIN, CONF_PASSWORD, CONF_SECRET


@dataclass
class Config:
    """Credentials from https://my.starline.ru/developer.

    Attributes:
        login: StarLine user login.
        password: StarLine user password.
        app_id: Application identifier.
        secret: Application secret key.

    """

    login: str = ""
    password: str = ""
    app_id: str = ""
    secret: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from a mapping keyed by the CONF_* constants."""
        return cls(
            login=data.get(CONF_LOGIN, ""),
            password=data.get(CONF_PASSWORD, ""),
            app_id=data.get(CONF_APP_ID, ""),
            secret=data.get(CONF_SECRET, ""),
        )

    def set_login(self, login: str) -> Config:
        """Set the user login and return the config."""
        self.login = login
        return self

    def set_password(self, password: str) -> Config:
        """Set the user password and return the config."""
        self.password = password
        return self

    def set_app_id(self, app_id: str) -> Config:
        """Set the application id and return the config."""
        self.app_id = app_id
        return self

    def set_secret(self, secret: str) -> Config:
        """Set the application secret and return the config."""
        self.secret = secret
        return self


@dataclass(frozen=True)
class StarlineDevice:
    """Represents a StarLine telematics device.

    Attributes:
        id: Device identifier used by the set_param endpoint.
        name: Alias given to the device by the user.

    """

    id: str
    name: str
