"""Retry policy: which failures to retry and how long to wait."""

import random

from pydantic import BaseModel

from webapi_sdk.exceptions import HTTPError, PlatformError, RequestError
from webapi_sdk.models.options import RetryConfig


class RetryDecision(BaseModel):
    """Outcome of a retry check. ``delay`` is in seconds."""

    retry: bool
    delay: float = 0.0


GIVE_UP = RetryDecision(retry=False)


class RetryPolicy:
    """Exponential backoff with optional jitter.

    ``delay = min(max_delay, base_delay * factor ** attempt)``, then perturbed
    by up to +/- ``jitter`` when randomization is on, and capped again.
    """

    def __init__(self, config: RetryConfig | None = None, *, rng: random.Random | None = None) -> None:
        self.config = config or RetryConfig()
        self._rng = rng or random.Random()

    def allows(self, attempt: int) -> bool:
        """True if another retry fits in the attempt budget."""
        retries = self.config.retries
        return retries is None or attempt < retries

    def is_retryable(self, error: BaseException) -> bool:
        if isinstance(error, PlatformError):
            return False
        if isinstance(error, RequestError):
            return True
        if isinstance(error, HTTPError):
            return error.status_code in self.config.retry_statuses
        return False

    def compute_delay(self, attempt: int) -> float:
        """Un-randomized delay for ``attempt`` (0 for the first retry)."""
        config = self.config
        try:
            raw = config.base_delay * config.factor**attempt
        except OverflowError:
            return config.max_delay
        return min(config.max_delay, raw)

    def next_delay(self, attempt: int) -> float:
        delay = self.compute_delay(attempt)
        if self.config.randomize and self.config.jitter:
            jitter = self.config.jitter
            delay *= self._rng.uniform(1.0 - jitter, 1.0 + jitter)
        return min(self.config.max_delay, delay)

    def should_retry(self, error: BaseException, attempt: int) -> RetryDecision:
        """Decide whether the job that failed with ``error`` runs again.

        Args:
            error: The classified failure.
            attempt: Retries already performed for this job.

        Returns:
            A decision carrying the backoff delay, or GIVE_UP.
        """
        if not self.is_retryable(error) or not self.allows(attempt):
            return GIVE_UP
        return RetryDecision(retry=True, delay=self.next_delay(attempt))
