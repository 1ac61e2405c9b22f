"""A bounded buffer whose produce and consume operations suspend tasks."""

from __future__ import annotations

import collections
import enum
import threading
from typing import Any, Callable, Deque, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_Resume = Optional[Callable[[], Any]]


class ProduceResult(enum.Enum):
    """The outcome of awaiting a produce operation."""

    PRODUCED = "produced"
    RING_BUFFER_STOPPED = "ring_buffer_stopped"


class ConsumeResult(enum.Enum):
    """Why a consume operation failed."""

    RING_BUFFER_STOPPED = "ring_buffer_stopped"


class RingBufferStopped(Exception):
    """Raised by a consume operation when the ring buffer has been stopped."""

    def __init__(self, result: ConsumeResult = ConsumeResult.RING_BUFFER_STOPPED) -> None:
        super().__init__(result.value)
        self.result = result


class _ProduceOperation(Generic[T]):
    def __init__(self, rb: "RingBuffer[T]", element: T) -> None:
        self._rb = rb
        self._element = element
        self._resume: _Resume = None
        self._stopped = False

    def __await__(self):
        with self._rb._lock:
            produced, to_resume = self._rb._produce_locked(self._element)
        if to_resume is not None:
            to_resume()
        if not produced:
            yield self._suspend
        return ProduceResult.RING_BUFFER_STOPPED if self._stopped else ProduceResult.PRODUCED

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        rb = self._rb
        with rb._lock:
            # A consumer may have made room since the first attempt.
            produced, to_resume = rb._produce_locked(self._element)
            if not produced:
                if rb._stopped:
                    self._stopped = True
                    return False
                self._resume = resume
                rb._produce_waiters.append(self)
                return True
        if to_resume is not None:
            to_resume()
        return False


class _ConsumeOperation(Generic[T]):
    def __init__(self, rb: "RingBuffer[T]") -> None:
        self._rb = rb
        self._element: Any = None
        self._resume: _Resume = None
        self._stopped = False

    def __await__(self):
        with self._rb._lock:
            consumed, to_resume = self._rb._consume_locked(self)
        if to_resume is not None:
            to_resume()
        if not consumed:
            yield self._suspend
        if self._stopped:
            raise RingBufferStopped()
        element, self._element = self._element, None
        return element

    def _suspend(self, resume: Callable[[], Any]) -> bool:
        rb = self._rb
        with rb._lock:
            # A producer may have added an element since the first attempt.
            consumed, to_resume = rb._consume_locked(self)
            if not consumed:
                if rb._stopped:
                    self._stopped = True
                    return False
                self._resume = resume
                rb._consume_waiters.append(self)
                return True
        if to_resume is not None:
            to_resume()
        return False


class RingBuffer(Generic[T]):
    """Fixed-capacity FIFO buffer shared by producing and consuming tasks.

    Producing into a full buffer and consuming from an empty one suspend the
    awaiting task until room or an element becomes available, or until the
    buffer is stopped with notify_waiters().
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity cannot be zero")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._elements: Deque[T] = collections.deque()
        self._produce_waiters: List[_ProduceOperation[T]] = []
        self._consume_waiters: List[_ConsumeOperation[T]] = []
        self._stopped = False

    def produce(self, element: T) -> _ProduceOperation[T]:
        """Return an awaitable that places the element, waiting for room if needed."""
        return _ProduceOperation(self, element)

    def consume(self) -> _ConsumeOperation[T]:
        """Return an awaitable that takes the oldest element, waiting if empty.

        Raises RingBufferStopped when awaited after the buffer has stopped and
        no element is left.
        """
        return _ConsumeOperation(self)

    def size(self) -> int:
        """The number of elements currently held."""
        with self._lock:
            return len(self._elements)

    def empty(self) -> bool:
        """True if the buffer holds no elements."""
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def notify_waiters(self) -> None:
        """Stop the buffer and resume every suspended producer and consumer."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True

        for waiters in (self._produce_waiters, self._consume_waiters):
            while True:
                with self._lock:
                    if not waiters:
                        break
                    op = waiters.pop()
                    op._stopped = True
                if op._resume is not None:
                    op._resume()

    def _produce_locked(self, element: T) -> Tuple[bool, _Resume]:
        if len(self._elements) == self._capacity:
            return False, None
        self._elements.append(element)
        if self._consume_waiters:
            # The suspended consumer is handed the oldest element directly.
            op = self._consume_waiters.pop()
            op._element = self._elements.popleft()
            return True, op._resume
        return True, None

    def _consume_locked(self, op: _ConsumeOperation[T]) -> Tuple[bool, _Resume]:
        if not self._elements:
            return False, None
        op._element = self._elements.popleft()
        if self._produce_waiters:
            # The suspended producer is handed the slot just freed.
            producer = self._produce_waiters.pop()
            self._elements.append(producer._element)
            return True, producer._resume
        return True, None