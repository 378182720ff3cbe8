"""Shared HTTP transport."""

import json
from typing import Any

import httpx
from pydantic import BaseModel

from webapi_sdk._version import __version__
from webapi_sdk.models.options import DEFAULT_TIMEOUT
from webapi_sdk.models.request import Request

ACTING_USER_HEADER = "X-Acting-User"


def create_http_client(
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    headers: dict[str, str] | None = None,
    agent: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.
        headers: Extra headers sent with every request.
        agent: Optional transport (proxies, connection pools), passed through as-is.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"webapi-sdk/{__version__}", **(headers or {})},
        transport=agent,
    )


class TransportOutcome(BaseModel):
    """What came back from one HTTP attempt.

    ``error`` is set when no response was received at all; otherwise
    ``status_code``, ``headers`` and ``body`` describe the response.
    """

    method: str
    status_code: int | None = None
    headers: dict[str, str] = {}
    body: Any = None
    error: BaseException | None = None

    model_config = {"arbitrary_types_allowed": True}


def encode_params(params: dict[str, Any]) -> dict[str, str]:
    """Form-encode method parameters, dropping None values."""
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, str):
            encoded[key] = value
        elif isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (int, float)):
            encoded[key] = str(value)
        else:
            encoded[key] = json.dumps(value)
    return encoded


class Transport:
    """Issues one HTTP call per request and captures the raw outcome.

    Network and HTTP failures are returned, not raised; classification
    happens in the dispatch layer.
    """

    def __init__(self, client: httpx.AsyncClient, *, token: str | None = None) -> None:
        self._client = client
        self._token = token

    def _get_headers(self, request: Request) -> dict[str, str]:
        headers: dict[str, str] = {}
        token = request.token or self._token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if request.acting_user:
            headers[ACTING_USER_HEADER] = request.acting_user
        return headers

    async def send(self, request: Request) -> TransportOutcome:
        """Send ``request`` and return whatever happened."""
        kwargs: dict[str, Any] = {}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout
        try:
            response = await self._client.post(
                request.method,
                data=encode_params(request.params),
                headers=self._get_headers(request),
                **kwargs,
            )
        except httpx.TransportError as e:
            return TransportOutcome(method=request.method, error=e)

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        return TransportOutcome(
            method=request.method,
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            body=body,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
