"""Public exceptions for the WebAPI SDK."""

from typing import Any


class WebAPIError(Exception):
    """Base exception for all WebAPI SDK errors."""

    code = "webapi_error"


class WebAPIConfigError(WebAPIError):
    """Configuration error (missing env vars, invalid options)."""

    code = "webapi_config_error"


class RequestError(WebAPIError):
    """The request never produced a response (connection failure, timeout)."""

    code = "webapi_request_error"

    def __init__(self, message: str, original: BaseException | None = None) -> None:
        super().__init__(message)
        self.original = original


class HTTPError(WebAPIError):
    """The server answered with a status outside the success range."""

    code = "webapi_http_error"

    def __init__(
        self,
        message: str,
        status_code: int,
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body


class RateLimitedError(WebAPIError):
    """The server asked us to slow down.

    ``retry_after`` is the wait in seconds the server mandated.
    """

    code = "webapi_rate_limited_error"

    def __init__(self, message: str, retry_after: float, status_code: int = 429) -> None:
        super().__init__(message)
        self.retry_after = retry_after
        self.status_code = status_code


class PlatformError(WebAPIError):
    """The remote operation ran and reported failure (``ok: false``)."""

    code = "webapi_platform_error"

    def __init__(self, message: str, error: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.error = error
        self.data = data or {}


class FileUploadError(WebAPIError):
    """File upload failed."""

    code = "webapi_file_upload_error"


class WebAPIValidationError(WebAPIError):
    """Validation error for request data."""

    code = "webapi_validation_error"
