"""Awaiting many awaitables at once and collecting their outcomes."""

from __future__ import annotations

import inspect
import threading
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from coroweave.task import Task


class WhenAllLatch:
    """Counts outstanding awaitables and resumes the waiter when all finish."""

    def __init__(self, count: int) -> None:
        self._lock = threading.Lock()
        # One extra count is held by the waiter until it has registered itself.
        self._count = count + 1
        self._resume: Optional[Callable[[], Any]] = None

    def is_ready(self) -> bool:
        """True once every awaitable has completed and the waiter has registered."""
        with self._lock:
            return self._count == 0

    def try_await(self, resume: Callable[[], Any]) -> bool:
        """Register the waiter; True if it must stay suspended."""
        with self._lock:
            self._resume = resume
            previous = self._count
            self._count -= 1
        return previous > 1

    def notify_awaitable_completed(self) -> None:
        """Record one completion, resuming the waiter if it was the last."""
        with self._lock:
            previous = self._count
            self._count -= 1
            resume = self._resume
        if previous == 1 and resume is not None:
            resume()


class WhenAllTask:
    """Drives one awaitable and reports its completion to a latch."""

    def __init__(self, awaitable: Awaitable[Any]) -> None:
        self._awaitable = awaitable
        self._task = Task(self._drive())

    async def _drive(self) -> Any:
        return await self._awaitable

    def start(self, latch: WhenAllLatch) -> None:
        """Begin running the awaitable, notifying the latch when it ends."""
        self._task.set_continuation(latch.notify_awaitable_completed)
        self._task.resume()

    def return_value(self) -> Any:
        """Return the awaitable's result or raise the exception it ended with."""
        return self._task.result()


class WhenAllReadyAwaitable:
    """Awaitable that starts every task and completes once all are done."""

    def __init__(self, tasks: Sequence[WhenAllTask], as_tuple: bool = True) -> None:
        self._tasks: List[WhenAllTask] = list(tasks)
        self._as_tuple = as_tuple
        self._latch = WhenAllLatch(len(self._tasks))

    def is_ready(self) -> bool:
        """True once every task has completed."""
        return self._latch.is_ready()

    def __await__(self):
        if not self.is_ready():
            yield self._suspend
        return self._collected()

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        for task in self._tasks:
            task.start(self._latch)
        return self._latch.try_await(resume)

    def _collected(self) -> Union[Tuple[WhenAllTask, ...], List[WhenAllTask]]:
        if self._as_tuple:
            return tuple(self._tasks)
        return list(self._tasks)


def _wrap(awaitable: Any) -> WhenAllTask:
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"object {awaitable!r} is not awaitable")
    return WhenAllTask(awaitable)


def when_all(*args: Any) -> WhenAllReadyAwaitable:
    """Await all the given awaitables.

    Called with several awaitables (or none) the result of awaiting is a tuple
    of WhenAllTask; called with a single iterable of awaitables it is a list.
    """
    if len(args) == 1 and not inspect.isawaitable(args[0]):
        iterable: Iterable[Any] = args[0]
        return WhenAllReadyAwaitable([_wrap(a) for a in iterable], as_tuple=False)
    return WhenAllReadyAwaitable([_wrap(a) for a in args], as_tuple=True)