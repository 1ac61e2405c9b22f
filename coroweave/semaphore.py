"""A counting semaphore whose acquire operation suspends the awaiting task."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, List, Optional


class AcquireResult(enum.Enum):
    """The outcome of awaiting an acquire operation."""

    ACQUIRED = "acquired"
    SEMAPHORE_STOPPED = "semaphore_stopped"
    UNKNOWN = "unknown"


class _AcquireOperation:
    """Awaitable that completes once a resource has been acquired or the semaphore stops."""

    def __init__(self, semaphore: "Semaphore") -> None:
        self._semaphore = semaphore

    def __await__(self):
        semaphore = self._semaphore
        if not (semaphore._stopped or semaphore.try_acquire()):
            yield self._suspend
        if semaphore._stopped:
            return AcquireResult.SEMAPHORE_STOPPED
        return AcquireResult.ACQUIRED

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        semaphore = self._semaphore
        with semaphore._waiter_lock:
            if semaphore._stopped:
                return False
            if semaphore.try_acquire():
                return False
            # Waiters are resumed last in, first out; semaphores are not meant to be fair.
            semaphore._waiters.append(resume)
            return True


class Semaphore:
    """Counting semaphore for tasks.

    A released resource is handed directly to a suspended waiter when there is
    one, so a newcomer cannot snatch it between the release and the wake-up.
    """

    def __init__(self, least_max_value: int, starting_value: Optional[int] = None) -> None:
        if starting_value is None:
            starting_value = least_max_value
        self._least_max_value = least_max_value
        self._counter = min(starting_value, least_max_value)
        self._counter_lock = threading.Lock()
        self._waiter_lock = threading.Lock()
        self._waiters: List[Callable[[], Any]] = []
        self._stopped = False

    def acquire(self) -> _AcquireOperation:
        """Return an awaitable that acquires one resource."""
        return _AcquireOperation(self)

    def release(self) -> None:
        """Release one resource, handing it to a waiter if one is suspended."""
        with self._waiter_lock:
            to_resume = self._waiters.pop() if self._waiters else None
            if to_resume is None:
                with self._counter_lock:
                    self._counter += 1
        if to_resume is not None:
            to_resume()

    def try_acquire(self) -> bool:
        """Take one resource without waiting; True if one was available."""
        with self._counter_lock:
            if self._counter <= 0:
                return False
            self._counter -= 1
            return True

    def notify_waiters(self) -> None:
        """Stop the semaphore and resume every waiter with a stopped result."""
        self._stopped = True
        while True:
            with self._waiter_lock:
                if not self._waiters:
                    return
                to_resume = self._waiters.pop()
            to_resume()

    def max_value(self) -> int:
        """The maximum number of resources the semaphore was created with."""
        return self._least_max_value

    def value(self) -> int:
        """The number of resources currently available."""
        with self._counter_lock:
            return self._counter