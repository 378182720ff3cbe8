"""Orchestration state for the request queue.

A ``Job`` wraps an immutable ``Request`` with the mutable state the queue
needs while it owns the job. ``QueueState`` is per client instance.
"""

import asyncio
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from webapi_sdk.models.request import Request

# =============================================================================
# Queue State
# =============================================================================


class QueueState(BaseModel):
    """Dispatch bookkeeping owned by one client instance.

    ``in_flight`` never exceeds ``max_concurrency``. While ``paused_until``
    is set nothing new is dispatched.
    """

    max_concurrency: int = Field(gt=0)
    in_flight: int = 0
    paused_until: float | None = None

    @property
    def paused(self) -> bool:
        return self.paused_until is not None

    @property
    def has_capacity(self) -> bool:
        return self.in_flight < self.max_concurrency


# =============================================================================
# Jobs
# =============================================================================


class JobState(str, Enum):
    """Lifecycle of a job inside the queue."""

    ADMITTED = "admitted"
    DISPATCHED = "dispatched"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RetryState(BaseModel):
    """Per-job retry bookkeeping. ``attempt`` only ever grows."""

    attempt: int = 0
    last_delay: float | None = None

    def record(self, delay: float) -> None:
        self.attempt += 1
        self.last_delay = delay


class Job:
    """A request plus the handle its caller is waiting on."""

    def __init__(self, request: Request, result: "asyncio.Future[dict[str, Any]]") -> None:
        self.request = request
        self.result = result
        self.state = JobState.ADMITTED
        self.retry = RetryState()
        self.retry_at: float | None = None
        self.timer: asyncio.TimerHandle | None = None

    @property
    def done(self) -> bool:
        return self.result.done()

    def succeed(self, payload: dict[str, Any]) -> None:
        if self.result.done():
            return
        self.state = JobState.SUCCEEDED
        self.result.set_result(payload)

    def fail(self, error: BaseException) -> None:
        if self.result.done():
            return
        self.state = JobState.FAILED
        self.result.set_exception(error)

    def __repr__(self) -> str:
        return f"<Job {self.request.method} state={self.state.value} attempt={self.retry.attempt}>"
