"""Pytest configuration and fixtures for StarLine API tests."""

from unittest.mock import Mock

import pytest

from starline.api import StarlineApiClient
from starline.models import Config


@pytest.fixture
def config() -> Config:
    """Fixture providing a complete StarLine config."""
    return (
        Config()
        .set_login("user@example.com")
        .set_password("password")
        .set_app_id("app-id")
        .set_secret("app-secret")
    )


@pytest.fixture
def error_logger() -> Mock:
    """Fixture providing a mock error logger."""
    return Mock()


@pytest.fixture
def client(config: Config, error_logger: Mock) -> StarlineApiClient:
    """Fixture providing an API client with config and error logger."""
    return StarlineApiClient(config=config, logger=error_logger)


@pytest.fixture
def sample_code_response() -> dict:
    """Fixture providing a sample getCode API response."""
    return {"state": 1, "desc": {"code": "C1"}}


@pytest.fixture
def sample_token_response() -> dict:
    """Fixture providing a sample getToken API response."""
    return {"state": 1, "desc": {"token": "T1"}}


@pytest.fixture
def sample_login_response() -> dict:
    """Fixture providing a sample user login API response."""
    return {
        "state": 1,
        "desc": {"id": "42", "login": "user@example.com", "user_token": "U1"},
    }


@pytest.fixture
def sample_slnet_response() -> dict:
    """Fixture providing a sample auth.slid API response."""
    return {"code": 200, "codestring": "OK", "user_id": "42"}


@pytest.fixture
def sample_devices_response() -> dict:
    """Fixture providing a sample user data API response.

    Returns:
        A dictionary representing a user data response with two devices.

    """
    return {
        "code": 200,
        "codestring": "OK",
        "user_data": {
            "devices": [
                {"device_id": "861311", "alias": "Car", "status": 1},
                {"device_id": "861312", "alias": "Truck", "status": 2},
            ],
        },
    }


@pytest.fixture
def sample_query_response() -> dict:
    """Fixture providing a sample set_param API response."""
    return {"code": "200", "codestring": "OK", "data": {"arm": 1}}
