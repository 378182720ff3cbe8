"""User-facing client for method-oriented web APIs.

Example usage:
    from webapi_sdk import WebClient

    async with WebClient("xoxb-token", base_url="https://api.example.com/api/") as client:
        # Awaitable form
        channels = await client.api_call("conversations.list")

        # Callback form
        client.api_call("users.info", {"user": "U123"}, callback=on_done)

        # Observe rate-limit pauses
        client.on_rate_limited(lambda seconds: print(f"paused {seconds}s"))
"""

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Callable, Iterable
from functools import partial
from typing import Any

import httpx
from pydantic import ValidationError

from webapi_sdk._internal.dispatch import RateLimitController, RequestQueue, RetryPolicy
from webapi_sdk._internal.dispatch.events import PauseHandler
from webapi_sdk._internal.http import Transport, create_http_client
from webapi_sdk._internal.log import get_logger
from webapi_sdk._internal.pagination import PaginationAggregator
from webapi_sdk.exceptions import WebAPIConfigError, WebAPIValidationError
from webapi_sdk.methods import MethodTable
from webapi_sdk.models.options import (
    DEFAULT_MAX_REQUEST_CONCURRENCY,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEOUT,
    ClientOptions,
    RetryConfig,
)
from webapi_sdk.models.request import Request

Callback = Callable[[BaseException | None, dict[str, Any] | None], None]


class WebClient:
    """Client for a method-oriented remote API.

    Every call goes through one request queue that bounds concurrency,
    retries transient failures with backoff and pauses on rate limits.
    Calls to cursor-paginated methods without an explicit ``cursor`` or
    ``limit`` transparently fetch and merge every page.

    One instance owns its queue and pause state; separate instances (for
    example one per token) never affect each other.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str,
        max_request_concurrency: int = DEFAULT_MAX_REQUEST_CONCURRENCY,
        retry_config: RetryConfig | dict[str, Any] | None = None,
        reject_rate_limited_calls: bool = False,
        timeout: float | None = DEFAULT_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
        headers: dict[str, str] | None = None,
        log_level: int | str | None = None,
        logger: logging.Logger | None = None,
        agent: httpx.AsyncBaseTransport | None = None,
        cursor_methods: Iterable[str] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Default auth token for every call.
            base_url: API root; method names are appended to it.
            max_request_concurrency: Maximum calls in flight at once.
            retry_config: Backoff settings (see ``RetryConfig``).
            reject_rate_limited_calls: Fail rate-limited calls instead of pausing.
            timeout: Default per-call timeout in seconds.
            page_size: Page size used when auto-paginating.
            headers: Extra headers sent with every call.
            log_level: Level for this client only; without ``logger`` it is
                set on a per-client child of the "webapi_sdk" logger.
            logger: Logger to write lifecycle events to.
            agent: httpx transport, passed through untouched.
            cursor_methods: Additional method names that support cursor pagination.

        Raises:
            WebAPIConfigError: If any option is invalid.
        """
        options: dict[str, Any] = {
            "base_url": base_url,
            "max_request_concurrency": max_request_concurrency,
            "reject_rate_limited_calls": reject_rate_limited_calls,
            "timeout": timeout,
            "page_size": page_size,
            "headers": headers or {},
        }
        if retry_config is not None:
            options["retry_config"] = retry_config
        try:
            self.options = ClientOptions(**options)
        except ValidationError as e:
            raise WebAPIConfigError(str(e)) from e

        self.token = token
        self.logger = get_logger(logger, log_level)
        self.methods = MethodTable(cursor_methods)

        self._transport = Transport(
            create_http_client(
                timeout=self.options.timeout,
                base_url=self.options.base_url,
                headers=self.options.headers,
                agent=agent,
            ),
            token=token,
        )
        retry_policy = RetryPolicy(self.options.retry_config)
        self._queue = RequestQueue(
            self._transport,
            max_concurrency=self.options.max_request_concurrency,
            retry_policy=retry_policy,
            rate_limiter=RateLimitController(
                retry_policy,
                reject_rate_limited_calls=self.options.reject_rate_limited_calls,
                logger=self.logger,
            ),
            logger=self.logger,
        )
        self._paginator = PaginationAggregator(
            self._queue.enqueue,
            self.methods,
            page_size=self.options.page_size,
            logger=self.logger,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "WebClient":
        """Create a client from environment variables.

        Required environment variables:
            WEBAPI_URL: The API root URL.

        Optional environment variables:
            WEBAPI_TOKEN: Default auth token.
            WEBAPI_MAX_REQUEST_CONCURRENCY: Maximum calls in flight.
            WEBAPI_REJECT_RATE_LIMITED_CALLS: Set to "1" to reject rate-limited calls.
            WEBAPI_TIMEOUT_MS: Per-call timeout in milliseconds.
            WEBAPI_LOG_LEVEL: Logger level name (e.g. "DEBUG").

        Keyword arguments override the environment.

        Raises:
            WebAPIConfigError: If WEBAPI_URL is missing.
            ValueError: If a numeric variable is malformed.
        """
        base_url = os.environ.get("WEBAPI_URL")
        if not base_url and "base_url" not in overrides:
            raise WebAPIConfigError("WEBAPI_URL is not set")

        kwargs: dict[str, Any] = {
            "token": os.environ.get("WEBAPI_TOKEN"),
            "base_url": base_url,
            "max_request_concurrency": int(
                os.environ.get(
                    "WEBAPI_MAX_REQUEST_CONCURRENCY", str(DEFAULT_MAX_REQUEST_CONCURRENCY)
                )
            ),
            "reject_rate_limited_calls": os.environ.get("WEBAPI_REJECT_RATE_LIMITED_CALLS", "") == "1",
            "log_level": os.environ.get("WEBAPI_LOG_LEVEL") or None,
        }
        timeout_ms = os.environ.get("WEBAPI_TIMEOUT_MS")
        if timeout_ms is not None:
            kwargs["timeout"] = int(timeout_ms) / 1000
        kwargs.update(overrides)
        return cls(**kwargs)

    # =========================================================================
    # Calling
    # =========================================================================

    def api_call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        token: str | None = None,
        acting_user: str | None = None,
        timeout: float | None = None,
        callback: Callback | None = None,
    ) -> "asyncio.Future[dict[str, Any]] | None":
        """Invoke a remote method.

        Must be called from a running event loop.

        Args:
            method: Remote method name, e.g. "conversations.list".
            params: Method parameters.
            token: Token for this call only.
            acting_user: Identifier of the user to act as.
            timeout: Transport timeout in seconds for this call only.
            callback: If given, called once as ``callback(error, result)``.

        Returns:
            An awaitable future resolving to the response body, or None when
            ``callback`` is given.

        Raises:
            WebAPIValidationError: If the request is malformed.
        """
        request = self._build_request(method, params, token, acting_user, timeout)
        future = asyncio.get_running_loop().create_task(self._execute(request))
        if callback is None:
            return future
        future.add_done_callback(partial(_deliver, callback))
        return None

    async def paginate(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        page_size: int | None = None,
        token: str | None = None,
        acting_user: str | None = None,
        timeout: float | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Iterate over raw pages of a cursor-paginated method.

        Pages are fetched lazily; leaving the loop stops fetching.
        """
        request = self._build_request(method, params, token, acting_user, timeout)
        async for page in self._paginator.pages(request, page_size=page_size):
            yield page

    def _build_request(
        self,
        method: str,
        params: dict[str, Any] | None,
        token: str | None,
        acting_user: str | None,
        timeout: float | None,
    ) -> Request:
        try:
            return Request(
                method=method,
                params=params or {},
                token=token,
                acting_user=acting_user,
                timeout=timeout,
            )
        except ValidationError as e:
            raise WebAPIValidationError(str(e)) from e

    async def _execute(self, request: Request) -> dict[str, Any]:
        if self._paginator.is_eligible(request):
            result = await self._paginator.collect(request)
        else:
            result = await self._queue.enqueue(request)
        self._log_warnings(request.method, result)
        return result

    def _log_warnings(self, method: str, result: dict[str, Any]) -> None:
        """Surface warnings the remote side attached to a response."""
        warnings: list[str] = []
        if isinstance(result.get("warning"), str):
            warnings.append(result["warning"])
        metadata = result.get("response_metadata")
        if isinstance(metadata, dict) and isinstance(metadata.get("warnings"), list):
            warnings.extend(str(w) for w in metadata["warnings"])
        for warning in warnings:
            self.logger.warning("%s responded with warning: %s", method, warning)

    # =========================================================================
    # Queue Control
    # =========================================================================

    def on_rate_limited(self, handler: PauseHandler) -> Callable[[], None]:
        """Subscribe to pause notifications.

        ``handler`` receives the pause duration in seconds each time a rate
        limit pauses dispatch; manual ``pause()`` calls are not reported.
        Returns a function that removes the subscription.
        """
        return self._queue.on_pause(handler)

    def pause(self, seconds: float) -> None:
        """Pause dispatch of new calls for ``seconds``.

        Unlike a rate-limit pause, this does not notify ``on_rate_limited``
        handlers.
        """
        self._queue.pause(seconds)

    @property
    def paused(self) -> bool:
        return self._queue.paused

    @property
    def in_flight(self) -> int:
        return self._queue.in_flight

    @property
    def pending(self) -> int:
        return self._queue.pending

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        """Cancel outstanding calls and close the HTTP client."""
        await self._queue.aclose()
        await self._transport.aclose()

    async def __aenter__(self) -> "WebClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


def _deliver(callback: Callback, future: "asyncio.Future[dict[str, Any]]") -> None:
    """Hand a finished call to a ``(error, result)`` callback."""
    if future.cancelled():
        callback(asyncio.CancelledError(), None)
        return
    error = future.exception()
    if error is not None:
        callback(error, None)
    else:
        callback(None, future.result())
