"""A host name awaiting resolution."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Hostname:
    """A named host; compares and orders by its name."""

    name: str = ""

    def data(self) -> str:
        """The host name text."""
        return self.name