"""API client for the StarLine telematics service.

This module provides the client that walks the StarLine authentication
chain (application code, application token, user token, SLNET session)
and sends device data and command requests with the resulting session.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import httpx

from .const import (
    GET_CODE_URL,
    GET_TOKEN_URL,
    LOGIN_SUCCESS_STATE,
    SET_PARAM_URL,
    SLNET_AUTH_URL,
    SLNET_COOKIE,
    SLNET_SUCCESS_CODE,
    TIMEOUT_SECONDS,
    USER_AGENT,
    USER_DATA_URL,
    USER_LOGIN_URL,
    VERIFY_SSL,
)
from .models import Config, StarlineDevice

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200

# Marks an undecodable body; a literal JSON null decodes to None.
INVALID_JSON = object()


class StarlineApiClientError(Exception):
    """Base exception for StarLine API client errors."""


class StarlineInvalidParamsError(StarlineApiClientError):
    """Exception raised when a request is called with unusable arguments."""


class StarlineConfigError(StarlineApiClientError):
    """Exception raised when credentials are needed but no config is set."""


class ErrorLogger(Protocol):
    """Sink for structured error records produced by the client."""

    def log_error(self, message: str, context: dict[str, Any]) -> None:
        """Record an error message together with its context."""


class LoggingErrorLogger:
    """Error logger that forwards records to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("starline")

    def log_error(self, message: str, context: dict[str, Any]) -> None:
        """Write the record to the logger at ERROR level."""
        self._logger.error("%s %s", message, context)


def md5_hex(value: str) -> str:
    """Return the hex MD5 digest of a string.

    The StarLine application endpoints expect MD5 derived secrets, so the
    digest is not used for any local security decision.
    """
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()


def sha1_hex(value: str) -> str:
    """Return the hex SHA1 digest of a string, as sent in the login form."""
    return hashlib.sha1(value.encode("utf-8"), usedforsecurity=False).hexdigest()


def get_path(data: Any, *keys: str, default: Any = None) -> Any:
    """Walk nested mappings and return the value found under keys.

    Args:
        data: Decoded JSON value.
        keys: Keys to follow, outermost first.
        default: Value returned when a key is missing, a level is not a
            mapping, or the final value is null.

    Returns:
        The nested value or default.

    """
    current = data
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return default if current is None else current


def as_str(value: Any) -> str:
    """Coerce a scalar JSON value to a string, "" for anything else."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def as_int(value: Any) -> int | None:
    """Coerce a scalar JSON value to an integer.

    Returns:
        The integer value, or None when the value has no integer reading.

    """
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def is_blank(value: str) -> bool:
    """Check if a coerced string counts as empty ("" or "0")."""
    return value in ("", "0")


def is_exact_int(value: Any, expected: int) -> bool:
    """Check that value is an integer (not a bool or string) equal to expected."""
    return (
        isinstance(value, int) and not isinstance(value, bool) and value == expected
    )


def is_status_ok(status: int) -> bool:
    """Check if HTTP status code is 200."""
    return status == HTTP_OK


def create_headers(
    slnet_token: str | None = None,
    token: str | None = None,
) -> dict[str, str]:
    """Create HTTP headers for StarLine API requests.

    Args:
        slnet_token: Optional SLNET session id, sent as the slnet cookie.
        token: Optional application token, sent as the token header.

    Returns:
        Dictionary containing HTTP headers.

    """
    headers = {
        "accept": "application/json",
        "user-agent": USER_AGENT,
    }
    if slnet_token is not None:
        headers["Cookie"] = f"{SLNET_COOKIE}={slnet_token}"
    if token is not None:
        headers["token"] = token
    return headers


def parse_json(response: httpx.Response) -> Any:
    """Decode a JSON response body.

    Returns:
        Decoded value, or INVALID_JSON when the body is not valid JSON.

    """
    try:
        return response.json()
    except ValueError:
        _LOGGER.debug("Response body is not valid JSON")
        return INVALID_JSON


def extract_slnet_cookie(response: httpx.Response) -> str:
    """Extract the SLNET session id from the first Set-Cookie header.

    Only the first cookie of the first Set-Cookie value is considered,
    e.g. "slnet=abc123; Path=/" gives "abc123".

    Returns:
        Session id, or "" when the header or the slnet cookie is missing.

    """
    cookies = response.headers.get_list("set-cookie")
    if not cookies:
        return ""

    first_cookie = cookies[0].split("; ")[0]
    if SLNET_COOKIE not in first_cookie:
        return ""

    parts = first_cookie.split("=")
    return parts[1] if len(parts) > 1 else ""


def extract_devices(data: Mapping[str, Any]) -> list[StarlineDevice]:
    """Extract device list from a user data response.

    Args:
        data: Result of StarlineApiClient.fetch_devices_info.

    Returns:
        List of StarlineDevice objects, skipping entries without device_id.

    """
    devices_data = get_path(data, "user_data", "devices", default=[])
    if not isinstance(devices_data, list):
        return []

    devices = []
    for device in devices_data:
        device_id = as_str(get_path(device, "device_id"))
        if is_blank(device_id):
            continue
        devices.append(
            StarlineDevice(id=device_id, name=as_str(get_path(device, "alias")))
        )
    return devices


def create_session_client(
    timeout: float = TIMEOUT_SECONDS,
    verify_ssl: bool = VERIFY_SSL,
) -> httpx.Client:
    """Create HTTP client for StarLine API requests.

    Args:
        timeout: Request timeout in seconds.
        verify_ssl: Whether TLS certificates are verified. Disabled by
            default because the StarLine hosts are reached without it.

    Returns:
        Configured httpx Client.

    """
    return httpx.Client(timeout=timeout, verify=verify_ssl)


class StarlineApiClient:
    """Client for the StarLine SLID and SLNET APIs.

    Every call opens a fresh HTTP client from client_factory. Expected
    failures (bad status, empty or invalid body, missing fields) are reported
    to the error logger and turned into an empty result; transport errors
    from httpx propagate to the caller.
    """

    def __init__(
        self,
        config: Config | None = None,
        logger: ErrorLogger | None = None,
        client_factory: Callable[[], httpx.Client] = create_session_client,
    ) -> None:
        """Initialize the client.

        Args:
            config: Credentials used by the authentication calls.
            logger: Optional sink for error records.
            client_factory: Callable returning a new httpx Client.

        """
        self._config = config
        self._logger = logger
        self._client_factory = client_factory

    @property
    def config(self) -> Config:
        """Get the client configuration."""
        if self._config is None:
            error_msg = f"Config not set, {Config.__qualname__}"
            raise StarlineConfigError(error_msg)
        return self._config

    def set_config(self, config: Config) -> StarlineApiClient:
        """Set the credentials used by the authentication calls."""
        self._config = config
        return self

    def set_logger(self, logger: ErrorLogger) -> StarlineApiClient:
        """Attach a sink for error records."""
        self._logger = logger
        return self

    def fetch_code(self) -> str:
        """Get the application code.

        Returns:
            Application code, or "" on failure.

        Raises:
            StarlineConfigError: If no config is set.

        """
        config = self.config
        return self._fetch_app_credential(
            GET_CODE_URL,
            config.app_id,
            md5_hex(config.secret),
            "code",
            "Code not found in response.",
            self.fetch_code.__qualname__,
        )

    def fetch_token(self, code: str) -> str:
        """Exchange an application code for an application token.

        Args:
            code: Application code from fetch_code.

        Returns:
            Application token, or "" on failure. An empty or "0" code
            returns "" without sending a request.

        Raises:
            StarlineConfigError: If no config is set.

        """
        if is_blank(code):
            return ""
        config = self.config
        return self._fetch_app_credential(
            GET_TOKEN_URL,
            config.app_id,
            md5_hex(config.secret + code),
            "token",
            "Token not found in response api",
            self.fetch_token.__qualname__,
        )

    def fetch_user_token(
        self,
        token: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Log the configured user in.

        Args:
            token: Application token from fetch_token.
            params: Extra form fields, e.g. user_ip, captchaSid, captchaCode.

        Returns:
            User token, or "" on failure.

        Raises:
            StarlineConfigError: If no config is set.

        """
        method = self.fetch_user_token.__qualname__
        config = self.config
        payload = {
            "login": config.login,
            "pass": sha1_hex(config.password),
        }
        if params:
            payload.update(params)

        _LOGGER.debug("Logging in StarLine user")
        response = self._send(
            "POST",
            USER_LOGIN_URL,
            headers=create_headers(token=token),
            data=payload,
        )
        if not self.check_response(response, method):
            return ""
        data = parse_json(response)
        if data is INVALID_JSON:
            return ""

        if not is_exact_int(get_path(data, "state"), LOGIN_SUCCESS_STATE):
            self._log_error(
                "fetch_user_token error response",
                {"method": method, "response_object": data},
            )
            return ""
        _LOGGER.debug("Successfully logged in StarLine user")
        return as_str(get_path(data, "desc", "user_token"))

    def fetch_slnet_token(self, user_token: str) -> tuple[str, str] | tuple[()]:
        """Authorize in StarLine NET with a user token.

        Both the JSON body (code 200 and a user_id) and the slnet cookie of
        the response must be present.

        Args:
            user_token: User token from fetch_user_token.

        Returns:
            Tuple of (slnet_token, user_id), or an empty tuple on failure.

        """
        method = self.fetch_slnet_token.__qualname__

        _LOGGER.debug("Authorizing in StarLine NET")
        response = self._send(
            "POST",
            SLNET_AUTH_URL,
            headers=create_headers(),
            json={"slid_token": user_token},
        )
        if not self.check_response(response, method):
            return ()
        data = parse_json(response)
        if data is INVALID_JSON:
            return ()

        code = as_int(get_path(data, "code"))
        user_id = as_str(get_path(data, "user_id"))
        if code != SLNET_SUCCESS_CODE or is_blank(user_id):
            self._log_error(
                "Error response",
                {"method": method, "response_object": data},
            )
            return ()

        slnet_token = extract_slnet_cookie(response)
        if is_blank(slnet_token):
            self._log_error(
                "SLNET not found in response cookies",
                {"method": method, "headers_object": dict(response.headers)},
            )
            return ()
        _LOGGER.debug("Received SLNET session for user %s", user_id)
        return (slnet_token, user_id)

    def fetch_devices_info(
        self,
        slnet_token: str,
        user_token: str,
        user_id: int | str,
    ) -> dict[str, Any]:
        """Get the data of all devices of a user.

        Args:
            slnet_token: SLNET session id from fetch_slnet_token.
            user_token: User token from fetch_user_token.
            user_id: User id from fetch_slnet_token.

        Returns:
            Decoded response body, or {} on failure.

        Raises:
            StarlineInvalidParamsError: If any argument is empty or zero.

        """
        values = (slnet_token, user_token, user_id)
        if any(is_blank(as_str(value)) for value in values):
            error_msg = "Incorrect param values."
            raise StarlineInvalidParamsError(error_msg)

        _LOGGER.debug("Fetching devices of StarLine user %s", user_id)
        return self._device_request(
            "GET",
            USER_DATA_URL.format(user_id=user_id),
            slnet_token,
            self.fetch_devices_info.__qualname__,
        )

    def run_query(
        self,
        slnet_token: str,
        device_id: str,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a control command to a device.

        Args:
            slnet_token: SLNET session id from fetch_slnet_token.
            device_id: Target device identifier.
            params: Command parameters, e.g. {"type": "arm", "arm": 1}.

        Returns:
            Decoded response body, or {} on failure.

        """
        _LOGGER.debug("Sending command to device %s: %s", device_id, params)
        return self._device_request(
            "POST",
            SET_PARAM_URL.format(device_id=device_id),
            slnet_token,
            self.run_query.__qualname__,
            json=dict(params or {}),
        )

    def check_response(self, response: httpx.Response, method: str = "") -> bool:
        """Check that a response has status 200 and a non-empty body.

        Args:
            response: HTTP response to check.
            method: Name of the calling operation, used in error records.

        Returns:
            True if the response can be decoded, False otherwise.

        """
        if not is_status_ok(response.status_code):
            self._log_error(
                f"Respond status code: {response.status_code}",
                {"method": method},
            )
            return False

        content = response.text
        if not content:
            self._log_error(
                f"Response is empty: {content}",
                {"method": method, "content": content},
            )
            return False
        return True

    def _fetch_app_credential(
        self,
        url: str,
        app_id: str,
        secret: str,
        key: str,
        error_message: str,
        method: str,
    ) -> str:
        _LOGGER.debug("Requesting application %s", key)
        response = self._send(
            "GET",
            url,
            headers=create_headers(),
            params={"appId": app_id, "secret": secret},
        )
        if not self.check_response(response, method):
            return ""
        data = parse_json(response)
        if data is INVALID_JSON:
            return ""

        value = get_path(data, "desc", key)
        if not isinstance(value, str):
            self._log_error(
                error_message,
                {"method": method, "response_object": data},
            )
            return ""
        return value

    def _device_request(
        self,
        http_method: str,
        url: str,
        slnet_token: str,
        method: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        response = self._send(
            http_method,
            url,
            headers=create_headers(slnet_token=slnet_token),
            **kwargs,
        )
        if not self.check_response(response, method):
            return {}
        data = parse_json(response)
        if data is INVALID_JSON:
            return {}

        if not isinstance(data, dict) or is_blank(as_str(data.get("code"))):
            self._log_error(
                "Error response",
                {"method": method, "response_object": data},
            )
            return {}
        return data

    def _send(self, http_method: str, url: str, **kwargs: Any) -> httpx.Response:
        with self._client_factory() as session:
            response = session.request(http_method, url, **kwargs)
        _LOGGER.debug("%s %s returned %d", http_method, url, response.status_code)
        return response

    def _log_error(self, message: str, context: dict[str, Any]) -> None:
        if self._logger is None:
            return
        self._logger.log_error(message, context)
