from __future__ import annotations

"""
Delayed Task Scheduling.

A minimal cancellable scheduler: `schedule(delay, fn)` returns a handle
that `cancel(handle)` can revoke as long as the task has not fired yet.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable


class Scheduler(ABC):
    """Interface for running a callback once after a delay."""

    @abstractmethod
    def schedule(self, delay: float, fn: Callable[[], None]) -> Any:
        """Run `fn` after `delay` seconds and return a cancellation handle."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Revoke a task that has not fired yet; no-op otherwise."""


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon `threading.Timer` instances."""

    def schedule(self, delay: float, fn: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, fn)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()
