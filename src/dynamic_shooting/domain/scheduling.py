# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Cooperative deferred execution with debounce.

A Debouncer holds at most one pending DeferredTask. Scheduling a new task
cancels the pending one, so a burst of requests within the delay window
results in a single execution, delay_s after the last request. Tasks run
only when the owner calls run_due(); nothing runs on another thread and
a task that has started is never interrupted.

The clock is injectable (defaults to time.monotonic) so callers and
tests control time explicitly.

No external dependencies — only stdlib logging/time/typing.
"""
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class DeferredTask:
    """Handle for a callback scheduled to run no earlier than due_at."""

    def __init__(self, callback: Callable[[], None], due_at: float):
        self._callback = callback
        self.due_at = due_at
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        """Prevent the task from running. No effect once it has run."""
        if not self.done:
            self.cancelled = True

    def is_due(self, now: float) -> bool:
        return not self.cancelled and not self.done and now >= self.due_at

    def run(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        self._callback()


class Debouncer:
    """
    Single-slot deferred scheduler.

    Args:
        delay_s: Settle window between the last request and execution.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        delay_s: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
    ):
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        self._delay_s = delay_s
        self._clock = clock
        self._pending: DeferredTask | None = None

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def pending(self) -> DeferredTask | None:
        return self._pending

    def schedule(self, callback: Callable[[], None]) -> DeferredTask:
        """Replace any pending task with callback, due delay_s from now."""
        if self._pending is not None:
            logger.debug("Cancelling deferred task due at %.3f", self._pending.due_at)
            self._pending.cancel()
        task = DeferredTask(callback, self._clock() + self._delay_s)
        self._pending = task
        logger.debug("Scheduled deferred task due at %.3f", task.due_at)
        return task

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def run_due(self, now: float | None = None) -> bool:
        """Run the pending task if its delay has elapsed.

        Returns:
            True if a task ran.
        """
        task = self._pending
        if task is None:
            return False
        if now is None:
            now = self._clock()
        if not task.is_due(now):
            return False
        self._pending = None
        logger.debug("Running deferred task due at %.3f", task.due_at)
        task.run()
        return True
