"""Concurrency-bounded request queue.

Jobs move through ``admitted -> dispatched -> succeeded | failed`` with a
detour through ``retry_scheduled -> admitted`` for transient failures. A
retried job re-enters at the tail of the queue when its timer fires.

All state changes happen on the event loop between awaits, so no locks are
needed.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from webapi_sdk._internal.dispatch.classifier import Classification, classify
from webapi_sdk._internal.dispatch.events import PauseHandler, PauseNotifier
from webapi_sdk._internal.dispatch.models import Job, JobState, QueueState
from webapi_sdk._internal.dispatch.rate_limit import RateLimitController
from webapi_sdk._internal.dispatch.redaction import redact_params
from webapi_sdk._internal.dispatch.retry import RetryDecision, RetryPolicy
from webapi_sdk._internal.http import Transport
from webapi_sdk.exceptions import RateLimitedError
from webapi_sdk.models.request import Request


class RequestQueue:
    """FIFO dispatcher with bounded concurrency, retries and pausing."""

    def __init__(
        self,
        transport: Transport,
        *,
        max_concurrency: int,
        retry_policy: RetryPolicy,
        rate_limiter: RateLimitController,
        logger: logging.Logger | None = None,
    ) -> None:
        self._transport = transport
        self._retry_policy = retry_policy
        self._rate_limiter = rate_limiter
        self._logger = logger or logging.getLogger(__name__)
        self.state = QueueState(max_concurrency=max_concurrency)
        self.notifier = PauseNotifier(self._logger)
        self._waiting: deque[Job] = deque()
        self._scheduled: set[Job] = set()
        self._tasks: set[asyncio.Task[None]] = set()
        self._resume_timer: asyncio.TimerHandle | None = None
        self._closed = False

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def in_flight(self) -> int:
        return self.state.in_flight

    @property
    def pending(self) -> int:
        """Jobs waiting for dispatch or for a retry timer."""
        return len(self._waiting) + len(self._scheduled)

    @property
    def paused(self) -> bool:
        return self.state.paused

    def on_pause(self, handler: PauseHandler) -> Callable[[], None]:
        """Subscribe to pause notifications; returns an unsubscribe function."""
        return self.notifier.subscribe(handler)

    def enqueue(self, request: Request) -> "asyncio.Future[dict[str, Any]]":
        """Admit ``request`` and return the handle its result will land in."""
        if self._closed:
            raise RuntimeError("request queue is closed")
        loop = asyncio.get_running_loop()
        job = Job(request, loop.create_future())
        self._logger.debug("Queued %s %s", request.method, redact_params(request.params))
        self._admit(job)
        return job.result

    def pause(self, seconds: float) -> None:
        """Stop dispatching new jobs for ``seconds``.

        In-flight jobs are unaffected. Pausing while already paused extends
        the pause if the new deadline is later. Pause subscribers are only
        notified of rate-limit pauses, not of manual ones.
        """
        loop = asyncio.get_running_loop()
        until = loop.time() + seconds
        if self.state.paused_until is None or until > self.state.paused_until:
            self.state.paused_until = until
            if self._resume_timer is not None:
                self._resume_timer.cancel()
            self._resume_timer = loop.call_at(until, self._resume, until)

    async def aclose(self) -> None:
        """Cancel timers and every job the queue still owns."""
        self._closed = True
        if self._resume_timer is not None:
            self._resume_timer.cancel()
            self._resume_timer = None
        for job in self._scheduled:
            if job.timer is not None:
                job.timer.cancel()
            job.result.cancel()
        self._scheduled.clear()
        while self._waiting:
            self._waiting.popleft().result.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # =========================================================================
    # State Machine
    # =========================================================================

    def _admit(self, job: Job) -> None:
        job.state = JobState.ADMITTED
        job.retry_at = None
        self._waiting.append(job)
        self._drain()

    def _drain(self) -> None:
        """Dispatch waiting jobs while capacity allows and we are not paused."""
        while self._waiting and not self.state.paused and self.state.has_capacity:
            job = self._waiting.popleft()
            if job.done:
                # The caller cancelled while the job was waiting.
                continue
            job.state = JobState.DISPATCHED
            self.state.in_flight += 1
            task = asyncio.get_running_loop().create_task(self._dispatch(job))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    def _pause_rate_limited(self, seconds: float) -> None:
        self.pause(seconds)
        self.notifier.notify(seconds)

    def _resume(self, until: float) -> None:
        if self.state.paused_until != until:
            return
        loop = asyncio.get_running_loop()
        if loop.time() < until:
            # Timers may fire up to one clock tick early.
            self._resume_timer = loop.call_at(until, self._resume, until)
            return
        self.state.paused_until = None
        self._resume_timer = None
        self._logger.info("Resuming dispatch")
        self._drain()

    def _readmit(self, job: Job) -> None:
        self._scheduled.discard(job)
        job.timer = None
        if job.done:
            return
        self._admit(job)

    async def _dispatch(self, job: Job) -> None:
        request = job.request
        self._logger.debug("Dispatching %s (attempt %d)", request.method, job.retry.attempt)
        try:
            outcome = await self._transport.send(request)
        except asyncio.CancelledError:
            job.result.cancel()
            raise
        except Exception as e:
            job.fail(e)
        else:
            self._settle(job, classify(outcome))
        finally:
            self.state.in_flight -= 1
            if not self._closed:
                self._drain()

    def _settle(self, job: Job, result: Classification) -> None:
        if result.ok:
            job.succeed(result.payload or {})
            return

        error = result.error
        if isinstance(error, RateLimitedError):
            decision = self._rate_limiter.handle(
                error, job.retry.attempt, self._pause_rate_limited
            )
        else:
            decision = self._retry_policy.should_retry(error, job.retry.attempt)

        if decision.retry and not self._closed:
            self._schedule_retry(job, decision)
        else:
            self._logger.debug("%s failed: %s", job.request.method, error)
            job.fail(error)

    def _schedule_retry(self, job: Job, decision: RetryDecision) -> None:
        loop = asyncio.get_running_loop()
        job.retry.record(decision.delay)
        job.state = JobState.RETRY_SCHEDULED
        job.retry_at = loop.time() + decision.delay
        job.timer = loop.call_later(decision.delay, self._readmit, job)
        self._scheduled.add(job)
        self._logger.info(
            "Retrying %s in %.2fs (attempt %d)",
            job.request.method,
            decision.delay,
            job.retry.attempt,
        )
