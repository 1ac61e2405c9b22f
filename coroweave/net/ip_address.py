"""IPv4 and IPv6 addresses held in binary form."""

from __future__ import annotations

import enum
import functools
import socket
from typing import Union


class Domain(enum.IntEnum):
    """The address family of an IP address or socket."""

    IPV4 = int(socket.AF_INET)
    IPV6 = int(socket.AF_INET6)


_DOMAIN_NAMES = {Domain.IPV4: "ipv4", Domain.IPV6: "ipv6"}


def domain_to_string(domain: Domain) -> str:
    """Return the short name of a domain."""
    try:
        return _DOMAIN_NAMES[Domain(domain)]
    except (ValueError, KeyError) as exc:
        raise ValueError(f"unknown domain {domain!r}") from exc


@functools.total_ordering
class IpAddress:
    """An IP address stored as network-order bytes together with its domain."""

    IPV4_LEN = 4
    IPV6_LEN = 16

    def __init__(
        self,
        binary_address: Union[bytes, bytearray, memoryview] = b"",
        domain: Domain = Domain.IPV4,
    ) -> None:
        self._domain = Domain(domain)
        raw = bytes(binary_address)
        if self._domain is Domain.IPV4 and len(raw) > self.IPV4_LEN:
            raise ValueError("provided binary ip address is too long")
        if len(raw) > self.IPV6_LEN:
            raise ValueError("provided binary ip address is too long")
        self._data = raw.ljust(self.IPV6_LEN, b"\x00")

    @classmethod
    def from_string(cls, address: str, domain: Domain = Domain.IPV4) -> "IpAddress":
        """Parse a textual address in the given domain."""
        domain = Domain(domain)
        try:
            packed = socket.inet_pton(int(domain), address)
        except (OSError, ValueError, TypeError) as exc:
            raise ValueError(f"failed to convert {address!r} to an ip address") from exc
        return cls(packed, domain)

    def to_string(self) -> str:
        """Return the textual form of the address."""
        try:
            return socket.inet_ntop(int(self._domain), self.data())
        except (OSError, ValueError) as exc:
            raise ValueError("failed to convert ip address to string representation") from exc

    def data(self) -> bytes:
        """The address bytes: 4 for IPv4, 16 for IPv6."""
        length = self.IPV4_LEN if self._domain is Domain.IPV4 else self.IPV6_LEN
        return self._data[:length]

    def domain(self) -> Domain:
        """The address family."""
        return self._domain

    def _key(self):
        return (int(self._domain), self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IpAddress):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IpAddress):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"IpAddress.from_string({self.to_string()!r}, {self._domain!s})"