"""The PartialFn value.

A PartialFn[A, B] pairs an evaluation procedure with a membership
procedure over the same domain:

    call(a)          -> Matched(b) | Unmatched(a)
    is_defined_at(a) -> bool

Invariant: ``is_defined_at(a)`` is True iff ``call(a)`` is Matched.

``compile_clauses`` builds both procedures from one clause list, so the
invariant holds by construction. ``PartialFn.new`` accepts two procedures
built some other way; the invariant is then the caller's responsibility.

Instances are immutable and hold no mutable state of their own, so one
value may be shared across threads as long as the procedures it wraps are
safe to call concurrently.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .outcome import Matched, Outcome, Unmatched

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


class PartialFn(Generic[A, B]):
    __slots__ = ("_call_fn", "_is_defined_at_fn")

    def __init__(
        self,
        call: Callable[[A], Outcome[A, B]],
        defined: Callable[[A], bool],
    ) -> None:
        if not callable(call):
            raise TypeError(f"call must be callable, got {type(call).__name__}")
        if not callable(defined):
            raise TypeError(f"defined must be callable, got {type(defined).__name__}")
        object.__setattr__(self, "_call_fn", call)
        object.__setattr__(self, "_is_defined_at_fn", defined)

    @classmethod
    def new(
        cls,
        call: Callable[[A], Outcome[A, B]],
        defined: Callable[[A], bool],
    ) -> PartialFn[A, B]:
        """Build a PartialFn from two procedures that already agree."""
        return cls(call, defined)

    @classmethod
    def empty(cls) -> PartialFn[Any, Any]:
        """The function defined nowhere."""
        return cls(Unmatched, lambda arg: False)

    @classmethod
    def total(cls, fn: Callable[[A], B]) -> PartialFn[A, B]:
        """Lift a total function; defined at every input."""
        return cls(lambda arg: Matched(fn(arg)), lambda arg: True)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -- evaluation ---------------------------------------------------------

    def call(self, arg: A) -> Outcome[A, B]:
        return self._call_fn(arg)

    def is_defined_at(self, arg: A) -> bool:
        return self._is_defined_at_fn(arg)

    def __call__(self, arg: A) -> Outcome[A, B]:
        return self._call_fn(arg)

    def lift(self, arg: A) -> B | None:
        """The matched value, or None on a domain-miss."""
        match self.call(arg):
            case Matched(value):
                return value
            case Unmatched():
                return None

    def apply_or_else(self, arg: A, default: Callable[[A], B]) -> B:
        """The matched value, or ``default(arg)`` on a domain-miss."""
        match self.call(arg):
            case Matched(value):
                return value
            case Unmatched():
                return default(arg)

    # -- composition --------------------------------------------------------

    def or_else(self, other: PartialFn[A, B]) -> PartialFn[A, B]:
        """Defined where either is defined; this function takes priority."""

        def evaluate(arg: A) -> Outcome[A, B]:
            outcome = self.call(arg)
            if outcome.is_matched:
                return outcome
            return other.call(arg)

        def defined(arg: A) -> bool:
            return self.is_defined_at(arg) or other.is_defined_at(arg)

        return PartialFn(evaluate, defined)

    def and_then(self, fn: Callable[[B], C]) -> PartialFn[A, C]:
        """Apply total ``fn`` to every matched value. Same domain."""

        def evaluate(arg: A) -> Outcome[A, C]:
            return self.call(arg).map(fn)

        return PartialFn(evaluate, self.is_defined_at)

    def restrict(self, predicate: Callable[[A], bool]) -> PartialFn[A, B]:
        """Shrink the domain to inputs where ``predicate`` also holds."""

        def evaluate(arg: A) -> Outcome[A, B]:
            if not predicate(arg):
                return Unmatched(arg)
            return self.call(arg)

        def defined(arg: A) -> bool:
            return bool(predicate(arg)) and self.is_defined_at(arg)

        return PartialFn(evaluate, defined)
