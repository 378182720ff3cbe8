"""Accumulator for auto-paginated list results."""

from typing import Any

from pydantic import BaseModel, Field


def next_cursor(page: dict[str, Any]) -> str | None:
    """Continuation token of ``page``; None when the list is exhausted."""
    metadata = page.get("response_metadata")
    if not isinstance(metadata, dict):
        return None
    cursor = metadata.get("next_cursor")
    if not isinstance(cursor, str) or not cursor:
        return None
    return cursor


class AggregatedResult(BaseModel):
    """Concatenated list fields plus the metadata of the newest page.

    List fields are appended in page-arrival order. Everything else is
    overwritten by each new page.
    """

    lists: dict[str, list[Any]] = Field(default_factory=dict)
    last_page: dict[str, Any] | None = None
    pages: int = 0

    def merge(self, page: dict[str, Any]) -> None:
        for key, value in page.items():
            if isinstance(value, list):
                self.lists.setdefault(key, []).extend(value)
        self.last_page = page
        self.pages += 1

    def finalize(self) -> dict[str, Any]:
        """The last page with its list fields replaced by the accumulators."""
        result = dict(self.last_page or {})
        for key, items in self.lists.items():
            result[key] = list(items)
        return result
