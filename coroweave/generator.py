"""Single-pass generators with a decorator for generator functions."""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class Generator(Iterable[T]):
    """A single-pass sequence of yielded values.

    Iterating it more than once continues where the previous pass stopped.
    Exceptions raised while producing values propagate to the iterating code.
    """

    def __init__(self, iterator: Optional[Iterable[T]] = None) -> None:
        self._iterator: Iterator[T] = iter(iterator) if iterator is not None else iter(())

    def __iter__(self) -> Iterator[T]:
        return self._iterator


def generator(func: Callable[..., Iterable[T]]) -> Callable[..., Generator[T]]:
    """Decorate a generator function so that calling it returns a Generator."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Generator[T]:
        return Generator(func(*args, **kwargs))

    return wrapper