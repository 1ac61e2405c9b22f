"""A fixed-size pool of worker threads that resumes suspended tasks."""

from __future__ import annotations

import collections
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, List, Optional


def _default_thread_count() -> int:
    return os.cpu_count() or 1


@dataclass
class ThreadPoolOptions:
    """Configuration for a ThreadPool."""

    thread_count: int = field(default_factory=_default_thread_count)
    on_thread_start_functor: Optional[Callable[[int], Any]] = None
    on_thread_stop_functor: Optional[Callable[[int], Any]] = None


class _ScheduleOperation:
    """Awaiting this moves the awaiting task onto the pool's threads."""

    def __init__(self, pool: "ThreadPool") -> None:
        self._pool = pool

    def __await__(self):
        yield self._suspend

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        self._pool._enqueue(resume)
        return True


class ThreadPool:
    """Executes scheduled resumptions on a fixed set of worker threads."""

    def __init__(self, options: Optional[ThreadPoolOptions] = None) -> None:
        self._options = options if options is not None else ThreadPoolOptions()
        self._queue: Deque[Callable[[], Any]] = collections.deque()
        self._condition = threading.Condition()
        self._size_lock = threading.Lock()
        self._size = 0
        self._shutdown_lock = threading.Lock()
        self._shutdown_requested = False
        self._stop = False
        self._threads: List[threading.Thread] = []
        for index in range(self._options.thread_count):
            thread = threading.Thread(
                target=self._executor, args=(index,), name=f"thread-pool-{index}", daemon=True
            )
            self._threads.append(thread)
            thread.start()

    def schedule(self):
        """Return an awaitable that resumes the awaiting task on a pool thread."""
        if self._shutdown_requested:
            raise RuntimeError("thread pool is shutting down, unable to schedule new tasks.")
        self._adjust_size(1)
        return _ScheduleOperation(self)

    def yield_(self):
        """Give up the current pool thread and get rescheduled."""
        return self.schedule()

    def resume(self, handle: Optional[Callable[[], Any]]) -> None:
        """Queue a resumption callable to run on a pool thread."""
        if handle is None:
            return
        self._adjust_size(1)
        self._enqueue(handle)

    def shutdown(self) -> None:
        """Stop the workers once the queue drains and join them; runs once."""
        with self._shutdown_lock:
            if self._shutdown_requested:
                return
            self._shutdown_requested = True
        with self._condition:
            self._stop = True
            self._condition.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current and thread.is_alive():
                thread.join()

    def size(self) -> int:
        """The number of scheduled resumptions not yet finished."""
        with self._size_lock:
            return self._size

    def empty(self) -> bool:
        """True if nothing is scheduled or running."""
        return self.size() == 0

    def thread_count(self) -> int:
        """The number of worker threads."""
        return self._options.thread_count

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _adjust_size(self, delta: int) -> None:
        with self._size_lock:
            self._size += delta

    def _enqueue(self, handle: Callable[[], Any]) -> None:
        with self._condition:
            self._queue.append(handle)
            self._condition.notify()

    def _executor(self, index: int) -> None:
        if self._options.on_thread_start_functor is not None:
            self._options.on_thread_start_functor(index)

        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._queue or self._stop)
                if not self._queue:
                    break
                handle = self._queue.popleft()
            try:
                handle()
            finally:
                self._adjust_size(-1)

        if self._options.on_thread_stop_functor is not None:
            self._options.on_thread_stop_functor(index)