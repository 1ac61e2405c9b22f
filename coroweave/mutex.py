"""A mutex for tasks whose lock operation suspends instead of blocking."""

from __future__ import annotations

import collections
import threading
from typing import Any, Callable, Deque, Optional


class ScopedLock:
    """Holds a locked Mutex and unlocks it once, at exit or on unlock()."""

    def __init__(self, mutex: "Mutex") -> None:
        self._mutex: Optional[Mutex] = mutex

    def unlock(self) -> None:
        """Release the mutex; further calls have no effect."""
        mutex, self._mutex = self._mutex, None
        if mutex is not None:
            mutex.unlock()

    def __enter__(self) -> "ScopedLock":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unlock()


class _LockOperation:
    """Awaitable that completes with a ScopedLock once the mutex is held."""

    def __init__(self, mutex: "Mutex") -> None:
        self._mutex = mutex

    def __await__(self):
        if not self._mutex.try_lock():
            yield self._suspend
        return ScopedLock(self._mutex)

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        mutex = self._mutex
        with mutex._state_lock:
            if not mutex._locked:
                mutex._locked = True
                return False
            mutex._waiters.append(resume)
            return True


class Mutex:
    """Mutual exclusion for tasks; waiters acquire the lock in arrival order."""

    def __init__(self) -> None:
        self._state_lock = threading.Lock()
        self._locked = False
        self._waiters: Deque[Callable[[], Any]] = collections.deque()

    def lock(self) -> _LockOperation:
        """Return an awaitable that acquires the lock and yields a ScopedLock."""
        return _LockOperation(self)

    def try_lock(self) -> bool:
        """Acquire the lock without waiting; True if it was free."""
        with self._state_lock:
            if self._locked:
                return False
            self._locked = True
            return True

    def unlock(self) -> None:
        """Release the lock, handing it directly to the oldest waiter if any."""
        with self._state_lock:
            if not self._locked:
                raise RuntimeError("unlock of an unlocked mutex")
            to_resume = self._waiters.popleft() if self._waiters else None
            if to_resume is None:
                self._locked = False
        if to_resume is not None:
            to_resume()