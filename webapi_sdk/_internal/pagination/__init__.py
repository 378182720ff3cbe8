"""Cursor pagination for list operations."""

from webapi_sdk._internal.pagination.aggregator import PaginationAggregator
from webapi_sdk._internal.pagination.models import AggregatedResult, next_cursor

__all__ = ["AggregatedResult", "PaginationAggregator", "next_cursor"]
