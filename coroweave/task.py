"""Lazily started tasks that drive Python coroutines.

Awaiters cooperate with a task through a small protocol: the generator
returned by an awaiter's ``__await__`` yields a callable.  The task calls it
with a zero-argument ``resume`` callable.  If the callable returns True the
coroutine stays suspended until ``resume`` is called (from any thread); if
it returns False the coroutine continues at once.
"""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Coroutine, Optional

_NOT_EXECUTED = "The return value was never set, did you execute the coroutine?"


class TaskState(enum.Enum):
    """What a task holds once it has run."""

    EMPTY = "empty"
    VALUE = "value"
    EXCEPTION = "exception"


class Task:
    """A coroutine that starts suspended and runs when resumed or awaited."""

    def __init__(self, coroutine: Optional[Coroutine[Any, Any, Any]] = None) -> None:
        self._coroutine = coroutine
        self._lock = threading.Lock()
        self._state = TaskState.EMPTY
        self._value: Any = None
        self._exception: Optional[BaseException] = None
        self._continuation: Optional[Callable[[], Any]] = None
        self._started = False
        self._running = False
        self._pending = False
        self._done = False

    def __del__(self) -> None:
        coroutine = getattr(self, "_coroutine", None)
        if coroutine is not None and not self._started:
            coroutine.close()

    def is_ready(self) -> bool:
        """True if the task has finished or holds no coroutine."""
        return self._coroutine is None or self._done

    def resume(self) -> bool:
        """Run the task until its next suspension; True if it is not yet done."""
        if self.is_ready():
            return False
        self._wake()
        return not self.is_ready()

    def destroy(self) -> bool:
        """Close the underlying coroutine; True if there was one to close."""
        coroutine = self._coroutine
        if coroutine is None:
            return False
        self._coroutine = None
        coroutine.close()
        return True

    def result(self) -> Any:
        """Return the task's value or raise the exception it finished with."""
        if self._state is TaskState.VALUE:
            return self._value
        if self._state is TaskState.EXCEPTION:
            assert self._exception is not None
            raise self._exception
        raise RuntimeError(_NOT_EXECUTED)

    def set_continuation(self, continuation: Optional[Callable[[], Any]]) -> None:
        """Set the callable invoked once the task completes."""
        with self._lock:
            self._continuation = continuation

    def __await__(self):
        if not self.is_ready():
            yield self._suspend_awaiter
        return self.result()

    def _suspend_awaiter(self, resume: Callable[[], Any]) -> bool:
        with self._lock:
            if self._coroutine is None or self._done:
                return False
            self._continuation = resume
            start = not self._started
        if start:
            self._wake()
        return True

    def _wake(self) -> None:
        with self._lock:
            if self._coroutine is None or self._done:
                return
            if self._running:
                self._pending = True
                return
            self._running = True
            self._started = True
        self._run()

    def _run(self) -> None:
        coroutine = self._coroutine
        to_throw: Optional[BaseException] = None
        while True:
            try:
                if to_throw is None:
                    suspend = coroutine.send(None)
                else:
                    error, to_throw = to_throw, None
                    suspend = coroutine.throw(error)
            except StopIteration as stop:
                self._finish(TaskState.VALUE, stop.value, None)
                return
            except Exception as exc:
                self._finish(TaskState.EXCEPTION, None, exc)
                return

            if not callable(suspend):
                to_throw = TypeError(f"object {suspend!r} cannot be awaited inside a Task")
                continue
            try:
                stay_suspended = suspend(self._wake)
            except Exception as exc:
                to_throw = exc
                continue

            with self._lock:
                if not stay_suspended or self._pending:
                    self._pending = False
                    continue
                self._running = False
                return

    def _finish(self, state: TaskState, value: Any, exception: Optional[BaseException]) -> None:
        with self._lock:
            self._state = state
            self._value = value
            self._exception = exception
            self._done = True
            self._running = False
            self._pending = False
            continuation = self._continuation
        if continuation is not None:
            continuation()