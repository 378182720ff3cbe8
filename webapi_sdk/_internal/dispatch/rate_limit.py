"""Rate-limit handling.

On a ``RateLimitedError`` the controller either rejects the call outright or
pauses the whole queue for the server-mandated wait and schedules the job to
run again once the pause expires. The rate-limited retry is charged against
the same attempt budget as every other retry.
"""

import logging
from collections.abc import Callable

from webapi_sdk._internal.dispatch.retry import GIVE_UP, RetryDecision, RetryPolicy
from webapi_sdk.exceptions import RateLimitedError


class RateLimitController:
    """Decides what happens to a job that hit a rate limit."""

    def __init__(
        self,
        retry_policy: RetryPolicy,
        *,
        reject_rate_limited_calls: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._retry_policy = retry_policy
        self.reject_rate_limited_calls = reject_rate_limited_calls
        self._logger = logger or logging.getLogger(__name__)

    def handle(
        self,
        error: RateLimitedError,
        attempt: int,
        pause: Callable[[float], None],
    ) -> RetryDecision:
        """Handle a rate-limited attempt.

        Args:
            error: The classified rate-limit failure.
            attempt: Retries already performed for the job.
            pause: Pauses all dispatch for the given number of seconds.

        Returns:
            A retry decision whose delay matches the pause, or GIVE_UP.
        """
        if self.reject_rate_limited_calls:
            self._logger.info(
                "Rate limited, rejecting call (retry after %ss)", error.retry_after
            )
            return GIVE_UP

        self._logger.warning(
            "Rate limited, pausing dispatch for %ss", error.retry_after
        )
        pause(error.retry_after)

        if not self._retry_policy.allows(attempt):
            return GIVE_UP
        return RetryDecision(retry=True, delay=error.retry_after)
