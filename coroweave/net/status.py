"""Outcomes of connect and receive operations."""

from __future__ import annotations

import enum


class ConnectStatus(enum.Enum):
    """The outcome of a connect attempt."""

    CONNECTED = "connected"
    INVALID_IP_ADDRESS = "invalid_ip_address"
    TIMEOUT = "timeout"
    ERROR = "error"


class RecvStatus(enum.Enum):
    """The outcome of a receive attempt."""

    OK = "ok"
    CLOSED = "closed"
    UDP_NOT_BOUND = "udp_not_bound"
    WOULD_BLOCK = "would_block"
    BAD_FILE_DESCRIPTOR = "bad_file_descriptor"
    CONNECTION_REFUSED = "connection_refused"
    MEMORY_FAULT = "memory_fault"
    INTERRUPTED = "interrupted"
    INVALID_ARGUMENT = "invalid_argument"
    NO_MEMORY = "no_memory"
    NOT_CONNECTED = "not_connected"
    NOT_A_SOCKET = "not_a_socket"


def connect_status_to_string(status: ConnectStatus) -> str:
    """Return the name of a connect status; raise ValueError if unknown."""
    if not isinstance(status, ConnectStatus):
        raise ValueError(f"invalid/unknown connect status {status!r}")
    return status.value


def recv_status_to_string(status: RecvStatus) -> str:
    """Return the name of a receive status, or "unknown" if it is not one."""
    if not isinstance(status, RecvStatus):
        return "unknown"
    return status.value