"""Python client for the StarLine telematics API."""

from .api import (
    ErrorLogger,
    LoggingErrorLogger,
    StarlineApiClient,
    StarlineApiClientError,
    StarlineConfigError,
    StarlineInvalidParamsError,
    create_session_client,
    extract_devices,
)
from .models import Config, StarlineDevice

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ErrorLogger",
    "LoggingErrorLogger",
    "StarlineApiClient",
    "StarlineApiClientError",
    "StarlineConfigError",
    "StarlineDevice",
    "StarlineInvalidParamsError",
    "__version__",
    "create_session_client",
    "extract_devices",
]
