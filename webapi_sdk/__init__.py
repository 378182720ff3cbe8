"""WebAPI SDK for Python.

This SDK provides an async client for method-oriented HTTP APIs.

Public API:
    WebClient - User-facing client
    RetryConfig - Backoff settings, plus the named presets
    exceptions - Error taxonomy

Internal (system-level, not for direct use):
    _internal.dispatch - Request queue, retries and rate limiting
    _internal.pagination - Cursor pagination
"""

from webapi_sdk._version import __version__
from webapi_sdk.client import WebClient
from webapi_sdk.exceptions import (
    FileUploadError,
    HTTPError,
    PlatformError,
    RateLimitedError,
    RequestError,
    WebAPIConfigError,
    WebAPIError,
    WebAPIValidationError,
)
from webapi_sdk.models import (
    FIVE_RETRIES_IN_FIVE_MINUTES,
    RAPID_RETRY_POLICY,
    TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES,
    RetryConfig,
)

__all__ = [
    "__version__",
    "WebClient",
    "RetryConfig",
    "TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES",
    "FIVE_RETRIES_IN_FIVE_MINUTES",
    "RAPID_RETRY_POLICY",
    "WebAPIError",
    "WebAPIConfigError",
    "WebAPIValidationError",
    "RequestError",
    "HTTPError",
    "RateLimitedError",
    "PlatformError",
    "FileUploadError",
]
