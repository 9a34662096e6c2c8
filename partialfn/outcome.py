"""Outcome of evaluating a partial function.

An evaluation either produced a value (``Matched``) or the input lay outside
the function's domain (``Unmatched``). ``Unmatched`` keeps the rejected input
so the caller can log it or hand it to a fallback.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

A = TypeVar("A")
B = TypeVar("B")


class DomainMissError(ValueError):
    """Raised by ``Unmatched.unwrap()`` when a miss is treated as fatal."""

    def __init__(self, arg: object) -> None:
        super().__init__(f"partial function is not defined at {arg!r}")
        self.arg = arg


@dataclass(frozen=True)
class Matched(Generic[B]):
    value: B

    @property
    def is_matched(self) -> bool:
        return True

    def unwrap(self) -> B:
        return self.value

    def unwrap_or(self, default: object) -> B:
        return self.value

    def map(self, fn: Callable[[B], object]) -> Matched:
        return Matched(fn(self.value))


@dataclass(frozen=True)
class Unmatched(Generic[A]):
    """Domain-miss: no clause accepted ``arg``."""

    arg: A

    @property
    def is_matched(self) -> bool:
        return False

    def unwrap(self) -> object:
        raise DomainMissError(self.arg)

    def unwrap_or(self, default: B) -> B:
        return default

    def map(self, fn: Callable[[object], object]) -> Unmatched[A]:
        return self


type Outcome[A, B] = Matched[B] | Unmatched[A]
