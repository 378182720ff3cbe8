"""Cursor pagination.

Walks ``response_metadata.next_cursor`` for methods that support it. Pages
are fetched strictly one after another since each cursor is only known once
the previous page has resolved.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from webapi_sdk._internal.pagination.models import AggregatedResult, next_cursor
from webapi_sdk.methods import MethodTable
from webapi_sdk.models.options import DEFAULT_PAGE_SIZE
from webapi_sdk.models.request import Request

CURSOR_PARAM = "cursor"
LIMIT_PARAM = "limit"

Submit = Callable[[Request], Awaitable[dict[str, Any]]]


class PaginationAggregator:
    """Fetches every page of a list operation through ``submit``."""

    def __init__(
        self,
        submit: Submit,
        methods: MethodTable,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        logger: logging.Logger | None = None,
    ) -> None:
        self._submit = submit
        self._methods = methods
        self.page_size = page_size
        self._logger = logger or logging.getLogger(__name__)

    def is_eligible(self, request: Request) -> bool:
        """Auto-paginate only cursor methods the caller is not paging manually."""
        if not self._methods.supports_cursor_pagination(request.method):
            return False
        return not (_supplied(request, CURSOR_PARAM) or _supplied(request, LIMIT_PARAM))

    async def pages(
        self,
        request: Request,
        *,
        page_size: int | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield each page of ``request`` in order.

        A ``limit`` or ``cursor`` already in the request is kept for the
        first page. Stops after a page with no continuation token.
        """
        if not _supplied(request, LIMIT_PARAM):
            request = request.with_params(**{LIMIT_PARAM: page_size or self.page_size})

        number = 0
        while True:
            number += 1
            self._logger.debug("Fetching page %d of %s", number, request.method)
            page = await self._submit(request)
            yield page

            cursor = next_cursor(page)
            if cursor is None:
                return
            request = request.with_params(**{CURSOR_PARAM: cursor})

    async def collect(self, request: Request) -> dict[str, Any]:
        """Fetch all pages and merge them into one response.

        Any page failure propagates and the partial accumulation is dropped.
        """
        aggregated = AggregatedResult()
        async for page in self.pages(request):
            aggregated.merge(page)
        self._logger.debug(
            "Collected %d page(s) of %s", aggregated.pages, request.method
        )
        return aggregated.finalize()


def _supplied(request: Request, name: str) -> bool:
    # None values never reach the wire, so they do not count as paging.
    return request.params.get(name) is not None
