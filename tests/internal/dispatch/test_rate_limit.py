"""Tests for the rate-limit controller."""

from webapi_sdk._internal.dispatch.rate_limit import RateLimitController
from webapi_sdk._internal.dispatch.retry import GIVE_UP, RetryPolicy
from webapi_sdk.exceptions import RateLimitedError
from webapi_sdk.models.options import RetryConfig


class TestRateLimitController:
    """Tests for RateLimitController.handle."""

    def test_pauses_and_retries(self):
        """Should pause for retry_after and retry after the same delay."""
        pauses = []
        controller = RateLimitController(RetryPolicy())
        decision = controller.handle(RateLimitedError("slow", retry_after=7.0), 0, pauses.append)
        assert pauses == [7.0]
        assert decision.retry is True
        assert decision.delay == 7.0

    def test_reject_does_not_pause(self):
        """Should give up without pausing when rejecting rate-limited calls."""
        pauses = []
        controller = RateLimitController(RetryPolicy(), reject_rate_limited_calls=True)
        decision = controller.handle(RateLimitedError("slow", retry_after=7.0), 0, pauses.append)
        assert decision == GIVE_UP
        assert pauses == []

    def test_counts_against_attempt_budget(self):
        """Should give up once the shared attempt budget is spent."""
        pauses = []
        controller = RateLimitController(RetryPolicy(RetryConfig(retries=2)))
        error = RateLimitedError("slow", retry_after=1.0)
        assert controller.handle(error, 1, pauses.append).retry is True
        assert controller.handle(error, 2, pauses.append) == GIVE_UP
        assert pauses == [1.0, 1.0]

    def test_zero_retries_still_pauses(self):
        """Should still pause the queue even when the call gives up."""
        pauses = []
        controller = RateLimitController(RetryPolicy(RetryConfig(retries=0)))
        decision = controller.handle(RateLimitedError("slow", retry_after=2.0), 0, pauses.append)
        assert decision == GIVE_UP
        assert pauses == [2.0]
