"""Response classification.

Turns a raw ``TransportOutcome`` into either a success payload or one of the
typed errors from ``webapi_sdk.exceptions``. Checks run in priority order:
no response, rate limited, HTTP error, platform error, success.
"""

import math
from typing import Any

from pydantic import BaseModel

from webapi_sdk._internal.http import TransportOutcome
from webapi_sdk.exceptions import (
    HTTPError,
    PlatformError,
    RateLimitedError,
    RequestError,
    WebAPIError,
)

RATE_LIMITED_STATUS = 429
RETRY_AFTER_HEADER = "retry-after"
DEFAULT_RETRY_AFTER = 1.0


class Classification(BaseModel):
    """Either ``payload`` (success) or ``error`` is set, never both."""

    payload: dict[str, Any] | None = None
    error: WebAPIError | None = None

    model_config = {"arbitrary_types_allowed": True}

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_retry_after(value: str | None) -> float:
    """Parse a Retry-After header in seconds, falling back to 1 second."""
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        seconds = float(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return DEFAULT_RETRY_AFTER
    return seconds


def _is_api_failure(body: Any) -> bool:
    return isinstance(body, dict) and body.get("ok", True) is False


def _platform_error(method: str, body: dict[str, Any]) -> PlatformError:
    error = str(body.get("error") or "unknown_error")
    return PlatformError(f"{method} failed: {error}", error=error, data=body)


def classify(outcome: TransportOutcome) -> Classification:
    """Classify one transport outcome."""
    method = outcome.method

    if outcome.error is not None or outcome.status_code is None:
        return Classification(
            error=RequestError(f"{method} request failed: {outcome.error!r}", original=outcome.error)
        )

    status = outcome.status_code
    if status == RATE_LIMITED_STATUS:
        retry_after = parse_retry_after(outcome.headers.get(RETRY_AFTER_HEADER))
        return Classification(
            error=RateLimitedError(
                f"{method} was rate limited, retry after {retry_after}s",
                retry_after=retry_after,
                status_code=status,
            )
        )

    body = outcome.body
    if not 200 <= status < 300:
        if _is_api_failure(body):
            return Classification(error=_platform_error(method, body))
        return Classification(
            error=HTTPError(
                f"{method} returned HTTP {status}",
                status_code=status,
                headers=outcome.headers,
                body=body,
            )
        )

    if not isinstance(body, dict):
        return Classification(
            error=HTTPError(
                f"{method} returned an unparsable body",
                status_code=status,
                headers=outcome.headers,
                body=body,
            )
        )

    if _is_api_failure(body):
        return Classification(error=_platform_error(method, body))

    return Classification(payload=body)
