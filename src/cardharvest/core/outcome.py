"""Typed outcome container for strategy chains.

Motivation
----------
Each extraction strategy either finds something or it does not, and a
strategy blowing up must look exactly like a strategy finding nothing. Rather
than threading exceptions through the chain we return an explicit value:

- `Hit(value)`  : the strategy produced a usable value.
- `Miss(reason)`: it did not; `reason` is a short human-readable note.

A chain then reads as "keep trying until something hits", and the collected
miss reasons explain a total failure.

Example
-------
>>> from cardharvest.core.outcome import hit, miss
>>> hit(3).map(lambda x: x + 1).unwrap()
4
>>> miss("nothing here").value_or_none() is None
True
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
U = TypeVar("U")


class Outcome(Generic[T]):
    """Sum type: either `Hit[T]` or `Miss`."""

    def is_hit(self) -> bool:
        """Return ``True`` if this is a :class:`Hit`."""
        return isinstance(self, Hit)

    def is_miss(self) -> bool:
        """Return ``True`` if this is a :class:`Miss`."""
        return isinstance(self, Miss)

    def unwrap(self) -> T:
        """Return the hit value or raise ``RuntimeError`` on a miss."""
        if isinstance(self, Hit):
            return cast(Hit[T], self).value
        raise RuntimeError(f"Attempted to unwrap a miss: {self!r}")

    def value_or_none(self) -> T | None:
        """Return the hit value, or ``None`` on a miss."""
        if isinstance(self, Hit):
            return cast(Hit[T], self).value
        return None

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        """Apply ``fn`` to a hit value; a miss passes through unchanged."""
        if isinstance(self, Hit):
            return Hit(fn(cast(Hit[T], self).value))
        return cast(Outcome[U], self)


@dataclass(frozen=True)
class Hit(Outcome[T]):
    """Successful outcome wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Miss(Outcome[T]):
    """Unsuccessful outcome carrying the reason it missed."""

    reason: str


def hit(value: T) -> Outcome[T]:
    """Construct :class:`Hit` with better type inference at call sites."""
    return Hit(value)


def miss(reason: str) -> Outcome[T]:
    """Construct :class:`Miss` with better type inference at call sites."""
    return Miss(reason)


__all__ = ["Hit", "Miss", "Outcome", "hit", "miss"]
