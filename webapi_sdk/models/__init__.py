"""Public models for the WebAPI SDK."""

from webapi_sdk.models.options import (
    FIVE_RETRIES_IN_FIVE_MINUTES,
    RAPID_RETRY_POLICY,
    TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES,
    ClientOptions,
    RetryConfig,
)
from webapi_sdk.models.request import Request

__all__ = [
    "ClientOptions",
    "Request",
    "RetryConfig",
    "TEN_RETRIES_IN_ABOUT_THIRTY_MINUTES",
    "FIVE_RETRIES_IN_FIVE_MINUTES",
    "RAPID_RETRY_POLICY",
]
