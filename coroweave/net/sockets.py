"""Owned socket file descriptors and helpers to create them."""

from __future__ import annotations

import contextlib
import enum
import os
import socket
from dataclasses import dataclass
from typing import Iterator

from coroweave.net.ip_address import Domain, IpAddress
from coroweave.poll import PollOp

FileDescriptor = int

_SHUTDOWN_HOW = {
    PollOp.READ: socket.SHUT_RD,
    PollOp.WRITE: socket.SHUT_WR,
    PollOp.READ_WRITE: socket.SHUT_RDWR,
}


class SocketType(enum.Enum):
    """The transport of a socket."""

    UDP = "udp"
    TCP = "tcp"


class Blocking(enum.Enum):
    """Whether system calls on a socket block."""

    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class SocketOptions:
    """How to create a socket."""

    domain: Domain
    type: SocketType
    blocking: Blocking


def type_to_os(socket_type: SocketType) -> int:
    """Return the operating system's socket type constant."""
    if socket_type is SocketType.UDP:
        return socket.SOCK_DGRAM
    if socket_type is SocketType.TCP:
        return socket.SOCK_STREAM
    raise ValueError(f"unknown socket type {socket_type!r}")


@contextlib.contextmanager
def _borrowed(fd: FileDescriptor) -> Iterator[socket.socket]:
    """Wrap a descriptor in a socket object without taking ownership of it."""
    sock = socket.socket(fileno=fd)
    try:
        yield sock
    finally:
        sock.detach()


class Socket:
    """Owns a socket descriptor and closes it when closed or collected."""

    def __init__(self, fd: FileDescriptor = -1) -> None:
        self._fd = fd

    def is_valid(self) -> bool:
        """True if the descriptor is set; says nothing about whether it still works."""
        return self._fd != -1

    def blocking(self, block: Blocking) -> bool:
        """Set the blocking mode; True on success."""
        if self._fd < 0:
            return False
        try:
            with _borrowed(self._fd) as sock:
                sock.setblocking(block is Blocking.YES)
        except OSError:
            return False
        return True

    def shutdown(self, how: PollOp = PollOp.READ_WRITE) -> bool:
        """Shut down the given directions; True on success."""
        if self._fd == -1:
            return False
        try:
            with _borrowed(self._fd) as sock:
                sock.shutdown(_SHUTDOWN_HOW[PollOp(how)])
        except OSError:
            return False
        return True

    def close(self) -> None:
        """Close the descriptor and leave the socket invalid."""
        fd, self._fd = self._fd, -1
        if fd == -1:
            return
        try:
            socket.socket(fileno=fd).close()
        except OSError:
            with contextlib.suppress(OSError):
                os.close(fd)

    def native_handle(self) -> FileDescriptor:
        """The underlying file descriptor."""
        return self._fd

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_fd", -1) != -1:
            self.close()

    def __repr__(self) -> str:
        return f"Socket(fd={self._fd})"


def make_socket(options: SocketOptions) -> Socket:
    """Create a socket with the given domain, type and blocking mode."""
    os_type = type_to_os(options.type)
    try:
        sock = socket.socket(int(options.domain), os_type)
    except OSError as exc:
        raise OSError("Failed to create socket.") from exc
    result = Socket(sock.detach())
    if options.blocking is Blocking.NO and not result.blocking(Blocking.NO):
        result.close()
        raise OSError("Failed to set socket to non-blocking mode.")
    return result


def make_accept_socket(
    options: SocketOptions, address: IpAddress, port: int, backlog: int = 128
) -> Socket:
    """Create a socket bound to address and port; TCP sockets also listen."""
    result = make_socket(options)
    try:
        with _borrowed(result.native_handle()) as sock:
            try:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                if hasattr(socket, "SO_REUSEPORT"):
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
            except OSError as exc:
                raise OSError("Failed to setsockopt(SO_REUSEADDR | SO_REUSEPORT)") from exc
            try:
                sock.bind((address.to_string(), port))
            except OSError as exc:
                raise OSError("Failed to bind.") from exc
            if options.type is SocketType.TCP:
                try:
                    sock.listen(backlog)
                except OSError as exc:
                    raise OSError("Failed to listen.") from exc
    except BaseException:
        result.close()
        raise
    return result