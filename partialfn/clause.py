"""Clauses: one guarded arm of a partial function.

A clause is ``p1 | p2 | ... if guard => transform``. Alternatives are tried
in order; the guard runs once per matching alternative, and the first
bindings it accepts go to the transform as keyword arguments:

    Clause((Binding("a"),), guard=lambda a: a > 0, transform=lambda a: a * 2)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from .patterns import Bindings, Pattern, match_pattern


@dataclass(frozen=True)
class Clause:
    """An ordered set of alternative patterns with an optional guard."""

    patterns: tuple[Pattern, ...]
    transform: Callable[..., Any]
    guard: Callable[..., bool] | None = None

    def __post_init__(self) -> None:
        if not self.patterns:
            raise ValueError("Clause needs at least one pattern")
        if not callable(self.transform):
            raise TypeError(f"Clause transform must be callable, got {type(self.transform).__name__}")
        if self.guard is not None and not callable(self.guard):
            raise TypeError(f"Clause guard must be callable, got {type(self.guard).__name__}")

    def bind(self, arg: Any) -> Iterator[Bindings]:
        """Bindings of each alternative matching ``arg``, in listed order."""
        for pattern in self.patterns:
            bindings = match_pattern(pattern, arg)
            if bindings is not None:
                yield bindings

    def accepts(self, bindings: Bindings) -> bool:
        if self.guard is None:
            return True
        return bool(self.guard(**bindings))

    def apply(self, bindings: Bindings) -> Any:
        return self.transform(**bindings)
