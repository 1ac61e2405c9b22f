"""Poll operations and poll outcomes for file descriptor readiness."""

from __future__ import annotations

import enum

_EPOLLIN = 0x001
_EPOLLOUT = 0x004


class PollOp(enum.IntEnum):
    """What to wait for on a file descriptor."""

    READ = _EPOLLIN
    WRITE = _EPOLLOUT
    READ_WRITE = _EPOLLIN | _EPOLLOUT


class PollStatus(enum.Enum):
    """The outcome of a poll operation."""

    EVENT = "event"
    TIMEOUT = "timeout"
    ERROR = "error"
    CLOSED = "closed"


def poll_op_readable(op: PollOp) -> bool:
    """Return True if the operation polls for readability."""
    return bool(int(op) & _EPOLLIN)


def poll_op_writeable(op: PollOp) -> bool:
    """Return True if the operation polls for writability."""
    return bool(int(op) & _EPOLLOUT)