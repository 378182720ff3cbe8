"""Request dispatch core.

WARNING: This is a system-level module used by ``WebClient``.
Do not call directly from user code.
"""

from webapi_sdk._internal.dispatch.classifier import Classification, classify, parse_retry_after
from webapi_sdk._internal.dispatch.events import PauseNotifier
from webapi_sdk._internal.dispatch.models import Job, JobState, QueueState, RetryState
from webapi_sdk._internal.dispatch.queue import RequestQueue
from webapi_sdk._internal.dispatch.rate_limit import RateLimitController
from webapi_sdk._internal.dispatch.retry import GIVE_UP, RetryDecision, RetryPolicy

__all__ = [
    "Classification",
    "classify",
    "parse_retry_after",
    "PauseNotifier",
    "Job",
    "JobState",
    "QueueState",
    "RetryState",
    "RequestQueue",
    "RateLimitController",
    "RetryPolicy",
    "RetryDecision",
    "GIVE_UP",
]
