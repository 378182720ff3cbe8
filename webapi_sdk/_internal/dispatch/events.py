"""Pause notifications."""

import logging
from collections.abc import Callable

PauseHandler = Callable[[float], None]


class PauseNotifier:
    """Explicit subscription list for queue pause events.

    Handlers are called synchronously, in subscription order, with the pause
    duration in seconds.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._handlers: list[PauseHandler] = []
        self._logger = logger or logging.getLogger(__name__)

    def subscribe(self, handler: PauseHandler) -> Callable[[], None]:
        """Register ``handler``; returns a function that unregisters it."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def notify(self, seconds: float) -> None:
        for handler in list(self._handlers):
            try:
                handler(seconds)
            except Exception:
                self._logger.exception("Pause handler %r raised", handler)

    def __len__(self) -> int:
        return len(self._handlers)
