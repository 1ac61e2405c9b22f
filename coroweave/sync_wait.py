"""Blocking the calling thread until an awaitable completes."""

from __future__ import annotations

import threading
from typing import Any, Awaitable

from coroweave.task import Task


class SyncWaitEvent:
    """A resettable flag that threads can block on until it is set."""

    def __init__(self, initially_set: bool = False) -> None:
        self._condition = threading.Condition()
        self._set = initially_set

    def set(self) -> None:
        """Set the flag and wake every waiting thread."""
        with self._condition:
            self._set = True
            self._condition.notify_all()

    def reset(self) -> None:
        """Clear the flag."""
        with self._condition:
            self._set = False

    def wait(self) -> None:
        """Block until the flag is set."""
        with self._condition:
            self._condition.wait_for(lambda: self._set)

    def is_set(self) -> bool:
        """Return True if the flag is currently set."""
        with self._condition:
            return self._set


def sync_wait(awaitable: Awaitable[Any]) -> Any:
    """Run the awaitable, block until it finishes and return its result."""
    event = SyncWaitEvent()

    async def drive() -> Any:
        return await awaitable

    task = Task(drive())
    task.set_continuation(event.set)
    task.resume()
    event.wait()
    return task.result()