"""Constants for the StarLine API client.

This module contains the constants used throughout the package,
including API endpoints, transport settings and configuration keys.
"""

SLID_URL = "https://id.starline.ru"
DEVELOPER_URL = "https://developer.starline.ru"

GET_CODE_URL = f"{SLID_URL}/apiV3/application/getCode"
GET_TOKEN_URL = f"{SLID_URL}/apiV3/application/getToken"
USER_LOGIN_URL = f"{SLID_URL}/apiV3/user/login"
SLNET_AUTH_URL = f"{DEVELOPER_URL}/json/v2/auth.slid"
USER_DATA_URL = f"{DEVELOPER_URL}/json/v3/user/{{user_id}}/data"
SET_PARAM_URL = f"{DEVELOPER_URL}/json/v1/device/{{device_id}}/set_param"

USER_AGENT = "python-starline"

TIMEOUT_SECONDS = 15.0
# The StarLine endpoints are called with certificate checks turned off.
VERIFY_SSL = False

SLNET_COOKIE = "slnet"
SLNET_SUCCESS_CODE = 200
LOGIN_SUCCESS_STATE = 1

CONF_LOGIN = "login"
CONF_PASSWORD = "password"
CONF_APP_ID = "app_id"
CONF_SECRET = "secret"
