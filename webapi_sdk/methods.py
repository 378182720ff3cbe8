"""Method table boundary.

The per-method argument schemas live outside the dispatch core. The only
thing the core needs to know about a method is whether it supports cursor
pagination.
"""

from collections.abc import Iterable

CURSOR_PAGINATED_METHODS: frozenset[str] = frozenset({
    "admin.apps.approved.list",
    "admin.apps.requests.list",
    "admin.conversations.search",
    "admin.teams.list",
    "admin.users.list",
    "apps.permissions.resources.list",
    "conversations.history",
    "conversations.list",
    "conversations.members",
    "conversations.replies",
    "files.info",
    "files.remote.list",
    "reactions.list",
    "stars.list",
    "team.integrationLogs",
    "users.conversations",
    "users.list",
})


class MethodTable:
    """Lookup of method metadata used by the client."""

    def __init__(self, cursor_methods: Iterable[str] | None = None) -> None:
        self._cursor_methods = set(CURSOR_PAGINATED_METHODS)
        if cursor_methods is not None:
            self._cursor_methods.update(cursor_methods)

    def supports_cursor_pagination(self, method: str) -> bool:
        return method in self._cursor_methods

    def register_cursor_method(self, method: str) -> None:
        """Mark ``method`` as cursor-paginated."""
        self._cursor_methods.add(method)
